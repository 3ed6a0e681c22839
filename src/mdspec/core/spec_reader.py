"""
Reader for a set of markdown specification documents.

Walks the parsed documents in order, numbering sections and collecting
every grammar fragment into one combined grammar. Problems are recorded
as diagnostics rather than raised, so one bad heading or fragment never
stops the rest of the run.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .config import MdspecConfig
from .diagnostics import Diagnostic, DiagnosticCode, Severity, SourceLocation, locate
from .document import Block, BlockQuote, CodeBlock, Heading, InlineCode, List, SourceDocument, Text
from .errors import GrammarSyntaxError
from .grammar import Grammar, Production, parse_grammar

logger = logging.getLogger(__name__)


class BookmarkCounter:
    """
    Sequential bookmark names (``_Toc00001``, ``_Grm00001``, ...).

    Each prefix counts independently. One counter belongs to one run.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def next(self, prefix: str) -> str:
        count = self._counts.get(prefix, 0) + 1
        self._counts[prefix] = count
        return f"{prefix}{count:05d}"


@dataclass
class SectionRef:
    number: str  # "10.1.2"
    title: str  # "Goto statement"
    level: int  # 1-based
    url: str  # "statements.md#goto-statement"
    bookmark: str  # "_Toc00023"
    filename: str


@dataclass
class ProductionRef:
    """A grammar code block and the names it defines."""

    code: str
    production_names: list[str]
    bookmark: str  # "_Grm00023"
    filename: str
    section: SectionRef | None = None
    block: CodeBlock | None = None


@dataclass
class SpecDocument:
    """Everything read from a set of specification documents."""

    grammar: Grammar = field(default_factory=Grammar)
    sections: list[SectionRef] = field(default_factory=list)
    productions: list[ProductionRef] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    texts: dict[str, str] = field(default_factory=dict)

    def find_production(self, name: str) -> ProductionRef | None:
        """Return the first code block that defines ``name``."""
        for ref in self.productions:
            if name in ref.production_names:
                return ref
        return None

    def locate_production(self, name: str) -> SourceLocation | None:
        """Best-effort location of the code block that defines ``name``."""
        ref = self.find_production(name)
        if ref is None:
            return None
        return locate(ref.filename, self.texts.get(ref.filename, ""), section=ref.section, paragraph=ref.block)


def heading_title(heading: Heading) -> str | None:
    """Title of a heading made of exactly one text or inline code span, else None."""
    if len(heading.content) != 1:
        return None
    span = heading.content[0]
    if isinstance(span, (Text, InlineCode)):
        return span.content.strip()
    return None


def section_slug(title: str) -> str:
    slug = []
    for c in title:
        if c.isascii() and (c.isalnum() or c in "-_"):
            slug.append(c.lower())
        elif c == " ":
            slug.append("-")
    return "".join(slug)


def section_url(filename: str, title: str) -> str:
    return f"{filename}#{section_slug(title)}"


def _walk(blocks: Sequence[Block]) -> Iterator[Block]:
    """Yield headings and code blocks in document order, looking inside lists and quotes."""
    for block in blocks:
        if isinstance(block, (Heading, CodeBlock)):
            yield block
        elif isinstance(block, BlockQuote):
            yield from _walk(block.children)
        elif isinstance(block, List):
            for item in block.items:
                yield from _walk(item.children)


class _SpecReader:
    def __init__(self, config: MdspecConfig, counter: BookmarkCounter):
        self.config = config
        self.counter = counter
        self.result = SpecDocument()
        self.productions: list[Production] = []
        self.numbers = [0] * config.sections.max_heading_level
        self.section: SectionRef | None = None

    def warn(self, code: DiagnosticCode, message: str, location: SourceLocation) -> None:
        self.result.diagnostics.append(Diagnostic(code, Severity.WARNING, message, location))

    def error(self, code: DiagnosticCode, message: str, location: SourceLocation) -> None:
        self.result.diagnostics.append(Diagnostic(code, Severity.ERROR, message, location))

    def read(self, document: SourceDocument) -> None:
        self.result.texts[document.filename] = document.text
        for block in _walk(document.blocks):
            if isinstance(block, Heading):
                self.read_heading(document, block)
            elif isinstance(block, CodeBlock):
                self.read_code_block(document, block)

    def read_heading(self, document: SourceDocument, heading: Heading) -> None:
        filename = document.filename
        title = heading_title(heading)
        if title is None:
            location = locate(filename, document.text, paragraph=heading)
            self.error(
                DiagnosticCode.UNSUPPORTED_HEADING,
                "heading must be a single literal or inline code span",
                location,
            )
            return

        max_level = self.config.sections.max_heading_level
        if heading.level > max_level:
            location = locate(filename, document.text, paragraph=heading)
            self.error(
                DiagnosticCode.HEADING_TOO_DEEP,
                f"only heading depths up to {'#' * max_level} are supported",
                location,
            )
            return

        index = heading.level - 1
        self.numbers[index] += 1
        for deeper in range(index + 1, len(self.numbers)):
            self.numbers[deeper] = 0

        section = SectionRef(
            number=".".join(str(n) for n in self.numbers[: heading.level]),
            title=title,
            level=heading.level,
            url=section_url(filename, title),
            bookmark=self.counter.next("_Toc"),
            filename=filename,
        )
        if any(s.url == section.url for s in self.result.sections):
            self.error(
                DiagnosticCode.DUPLICATE_SECTION,
                f"duplicate section title {section.url}",
                locate(filename, document.text, section=section),
            )
        self.result.sections.append(section)
        self.section = section

    def read_code_block(self, document: SourceDocument, block: CodeBlock) -> None:
        if (block.language or "").strip() != self.config.grammar.language:
            return

        filename = document.filename
        try:
            fragment = parse_grammar(block.content, source=filename)
        except GrammarSyntaxError as e:
            where = ""
            if e.context is not None:
                where = f" (fragment line {e.context.line}, column {e.context.column})"
            location = locate(filename, document.text, section=self.section, paragraph=block)
            self.error(DiagnosticCode.GRAMMAR_SYNTAX, f"grammar syntax error: {e.message}{where}", location)
            logger.warning("Dropped grammar fragment in %s: %s", location, e.message)
            return

        ref = ProductionRef(
            code=block.content,
            production_names=fragment.production_names(),
            bookmark=self.counter.next("_Grm"),
            filename=filename,
            section=self.section,
            block=block,
        )
        self.result.productions.append(ref)

        url = self.section.url if self.section else ""
        title = self.section.title if self.section else ""
        known = {p.name for p in self.productions if p.name is not None}
        for production in fragment.productions:
            if production.name is not None and production.name in known:
                location = locate(filename, document.text, section=self.section, paragraph=block)
                self.warn(
                    DiagnosticCode.DUPLICATE_PRODUCTION,
                    f"duplicate grammar for {production.name}",
                    location,
                )
                logger.warning("Duplicate grammar for %s in %s", production.name, filename)
            self.productions.append(production.model_copy(update={"link": url, "link_name": title}))
            if production.name is not None:
                known.add(production.name)

        logger.debug("Read %d productions from a grammar block in %s", len(ref.production_names), filename)

    def finish(self) -> SpecDocument:
        self.result.grammar = Grammar(productions=self.productions)
        return self.result


def read_spec(
    documents: Sequence[SourceDocument],
    config: MdspecConfig | None = None,
    counter: BookmarkCounter | None = None,
) -> SpecDocument:
    """
    Read markdown specification documents in order.

    Args:
        documents: Parsed documents, in reading order
        config: Settings (defaults when omitted)
        counter: Bookmark counter for this run (a fresh one when omitted)

    Returns:
        SpecDocument with the sections, grammar blocks, combined grammar
        and any diagnostics
    """
    reader = _SpecReader(config or MdspecConfig(), counter or BookmarkCounter())
    for document in documents:
        reader.read(document)
    result = reader.finish()
    logger.info(
        "Read %d documents: %d sections, %d grammar blocks, %d productions",
        len(documents),
        len(result.sections),
        len(result.productions),
        len(result.grammar.rules()),
    )
    return result
