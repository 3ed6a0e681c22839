"""
Segmentation of raw document text into words, lines, fenced code blocks,
paragraphs and heading-delimited sections.

Every unit carries the ``Span`` it came from, in the coordinates of the
buffer that was passed in.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..span import Span

_WORD_RE = re.compile(r"[A-Za-z0-9']+")

# Optional indent, three or more backticks or tildes, optional info string
_FENCE_START_RE = re.compile(r"^( *)(`{3,}|~{3,}) *([^ \r\n]*)")

PARAGRAPH_LINE_END = "\r\n"


@dataclass(frozen=True)
class WordSpan:
    word: str
    span: Span


@dataclass(frozen=True)
class LineSpan:
    line: str  # without its terminator
    span: Span


@dataclass(frozen=True)
class LineOrCodeBlock:
    """Either one plain line or one whole fenced code block."""

    span: Span
    line: str | None = None
    code: str | None = None
    language: str | None = None

    @property
    def is_code_block(self) -> bool:
        return self.code is not None

    @property
    def is_blank(self) -> bool:
        return self.line is not None and not self.line.strip()


@dataclass(frozen=True)
class TextSpan:
    text: str
    span: Span


@dataclass(frozen=True)
class SectionSpan:
    hashes: str
    title: str
    span: Span

    @property
    def level(self) -> int:
        return len(self.hashes)


@dataclass
class _OpenFence:
    indent: int
    fence: str
    language: str
    start: int
    lines: list[str] = field(default_factory=list)

    def close(self, end: int) -> LineOrCodeBlock:
        code = "".join(line + PARAGRAPH_LINE_END for line in self.lines)
        return LineOrCodeBlock(
            span=Span(self.start, end - self.start),
            code=code,
            language=self.language,
        )


def words(text: str) -> list[WordSpan]:
    """Split text into maximal runs of ASCII letters, digits and apostrophes."""
    return [WordSpan(m.group(), Span(m.start(), m.end() - m.start())) for m in _WORD_RE.finditer(text)]


def raw_lines(text: str) -> Iterator[LineSpan]:
    """
    Split text at \\r\\n, \\r or \\n.

    A terminator at the very end of the text does not start another line.
    """
    i = 0
    n = len(text)
    while i < n:
        start = i
        while i < n and text[i] not in "\r\n":
            i += 1
        yield LineSpan(text[start:i], Span(start, i - start))
        if text.startswith("\r\n", i):
            i += 2
        elif i < n:
            i += 1


def _remove_indent(line: str, indent: int) -> str:
    """Strip up to ``indent`` leading spaces."""
    removed = 0
    while removed < indent and line[removed : removed + 1] == " ":
        removed += 1
    return line[removed:]


def _is_fence_end(line: str, fence: str) -> bool:
    if not line.startswith(fence):
        return False
    return line.lstrip(fence[0]).lstrip(" ") == ""


def lines_and_code_fences(text: str) -> Iterator[LineOrCodeBlock]:
    """
    Yield plain lines, folding each fenced code block into a single unit.

    Lines inside a fence lose up to as many leading spaces as the opening
    fence was indented by. A fence that is never closed runs to the end of
    the text.
    """
    fence: _OpenFence | None = None
    last_end = 0
    for raw in raw_lines(text):
        last_end = raw.span.end
        if fence is None:
            m = _FENCE_START_RE.match(raw.line)
            if m is None:
                yield LineOrCodeBlock(span=raw.span, line=raw.line)
            else:
                fence = _OpenFence(
                    indent=len(m.group(1)),
                    fence=m.group(2),
                    language=m.group(3),
                    start=raw.span.start,
                )
            continue

        content = _remove_indent(raw.line, fence.indent)
        if _is_fence_end(content, fence.fence):
            yield fence.close(raw.span.end)
            fence = None
        else:
            fence.lines.append(content)

    if fence is not None:
        yield fence.close(last_end)


def paragraphs(text: str) -> Iterator[TextSpan]:
    """
    Group runs of non-blank lines into paragraphs.

    A fenced code block is a paragraph of its own; blank lines only
    separate paragraphs. Paragraph text joins its lines with \\r\\n.
    """
    units = list(lines_and_code_fences(text))
    i = 0
    while i < len(units):
        unit = units[i]
        if unit.is_blank:
            i += 1
        elif unit.is_code_block:
            yield TextSpan(unit.code or "", unit.span)
            i += 1
        else:
            start = unit.span.start
            end = unit.span.end
            lines = []
            while i < len(units) and not units[i].is_code_block and not units[i].is_blank:
                lines.append(units[i].line)
                end = units[i].span.end
                i += 1
            joined = "".join(line + PARAGRAPH_LINE_END for line in lines)
            yield TextSpan(joined, Span(start, end - start))


def sections(text: str) -> list[SectionSpan]:
    """
    Find '#' headings; each section runs up to the next heading line or
    the end of the text.
    """
    headings: list[tuple[str, str, int]] = []
    for raw in raw_lines(text):
        if raw.line.startswith("#"):
            title = raw.line.lstrip("#")
            hashes = raw.line[: len(raw.line) - len(title)]
            headings.append((hashes, title.strip(), raw.span.start))

    result = []
    for i, (hashes, title, start) in enumerate(headings):
        end = headings[i + 1][2] if i + 1 < len(headings) else len(text)
        result.append(SectionSpan(hashes, title, Span(start, end - start)))
    return result
