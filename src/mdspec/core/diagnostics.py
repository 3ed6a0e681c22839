"""
Diagnostic records and the human-readable locations attached to them.

Locations are recovered with the fuzzy locator: a section narrows the
text, a paragraph narrows it further, and a span pins down columns. Each
stage that matches makes the location more precise; none of them raise.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .document import Block, Inline
from .fuzzy import block_words, find_line_col, find_paragraph, find_section, find_span, inline_words
from .grammar.compare import DifferenceKind, GrammarDifference
from .span import Span

TOOL_NAME = "mdspec"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Stable identifiers for every diagnostic mdspec emits."""

    GRAMMAR_SYNTAX = "MD001"
    DUPLICATE_PRODUCTION = "MD002"
    DUPLICATE_SECTION = "MD003"
    UNSUPPORTED_HEADING = "MD004"
    HEADING_TOO_DEEP = "MD005"
    SUPERFLUOUS_PRODUCTION = "MD021"
    MISSING_PRODUCTION = "MD022"
    PRODUCTION_MISMATCH = "MD023"


@dataclass(frozen=True)
class SourceLocation:
    """
    A file plus as much of a line/column range as could be recovered.

    Lines and columns are 1-based; the end column is inclusive.
    """

    filename: str
    start_line: int | None = None
    start_col: int | None = None
    end_line: int | None = None
    end_col: int | None = None

    def __str__(self) -> str:
        if self.start_line is None:
            return self.filename
        if self.start_col is not None and self.end_line is not None and self.end_col is not None:
            return f"{self.filename}({self.start_line},{self.start_col},{self.end_line},{self.end_col})"
        if self.end_line is not None and self.end_line != self.start_line:
            return f"{self.filename}({self.start_line}-{self.end_line})"
        return f"{self.filename}({self.start_line})"


@dataclass(frozen=True)
class Diagnostic:
    """
    One reportable problem.

    ``details`` holds extra lines printed under the main message.
    """

    code: DiagnosticCode
    severity: Severity
    message: str
    location: SourceLocation | None = None
    details: tuple[str, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def format(self) -> str:
        where = str(self.location) if self.location is not None else TOOL_NAME
        head = f"{where}: {self.severity.value} {self.code.value}: {self.message}"
        return "\n".join([head, *(f"  {line}" for line in self.details)])


class SectionTarget(Protocol):
    """Anything with a heading level and a title, such as a SectionRef."""

    level: int
    title: str


def locate(
    filename: str,
    text: str,
    section: SectionTarget | None = None,
    paragraph: Block | None = None,
    span: Inline | Sequence[Inline] | None = None,
) -> SourceLocation:
    """
    Best-effort location of an element of ``text``.

    Returns ``file(line)`` when only the section matched,
    ``file(startLine-endLine)`` for a paragraph,
    ``file(startLine,startCol,endLine,endCol)`` for a span and just the
    file name when nothing matched.
    """
    buffer = text
    base = 0
    found: Span | None = None
    precision = None

    if section is not None:
        match = find_section(buffer, section.level, section.title)
        if match is not None:
            found = match
            precision = "section"
            buffer = match.slice(text)
            base = match.start

    if paragraph is not None:
        match = find_paragraph(buffer, block_words(paragraph))
        if match is not None:
            buffer = match.slice(buffer)
            found = match.shift(base)
            precision = "paragraph"
            base = found.start

    if span is not None:
        match = find_span(buffer, inline_words(span))
        if match is not None:
            found = match.shift(base)
            precision = "span"

    if found is None:
        return SourceLocation(filename)

    start_line, start_col = find_line_col(filename, text, found.start)
    if precision == "section":
        return SourceLocation(filename, start_line)

    end_line, end_col = find_line_col(filename, text, max(found.end - 1, found.start))
    if precision == "paragraph":
        return SourceLocation(filename, start_line, end_line=end_line)
    return SourceLocation(filename, start_line, start_col, end_line, end_col)


def escape_newlines(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n")


def difference_diagnostic(
    difference: GrammarDifference,
    authority_name: str,
    location: SourceLocation | None = None,
) -> Diagnostic:
    """Turn a grammar difference into an error diagnostic."""
    name = difference.name
    if difference.kind == DifferenceKind.EXTRA_IN_COPY:
        return Diagnostic(
            DiagnosticCode.SUPERFLUOUS_PRODUCTION,
            Severity.ERROR,
            f"markdown has superfluous production '{name}'",
            location,
        )
    if difference.kind == DifferenceKind.MISSING_IN_COPY:
        return Diagnostic(
            DiagnosticCode.MISSING_PRODUCTION,
            Severity.ERROR,
            f"markdown lacks production '{name}'",
            location,
        )
    return Diagnostic(
        DiagnosticCode.PRODUCTION_MISMATCH,
        Severity.ERROR,
        f"production '{name}' differs between markdown and {authority_name}",
        location,
        details=(
            f"{authority_name} says {escape_newlines(difference.authority_text or '')}",
            f"markdown says {escape_newlines(difference.copy_text or '')}",
        ),
    )


def count_by_severity(diagnostics: Iterable[Diagnostic]) -> tuple[int, int]:
    """Return (errors, warnings)."""
    errors = warnings = 0
    for diagnostic in diagnostics:
        if diagnostic.is_error:
            errors += 1
        else:
            warnings += 1
    return errors, warnings
