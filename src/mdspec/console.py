"""
Rich console output for diagnostics and colorized grammar text.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.style import Style
from rich.text import Text

from .core.diagnostics import Diagnostic, Severity, count_by_severity
from .core.grammar import ColorizedLine, StyleCategory

default_console = Console()

# Style definitions
STYLES = {
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "location": Style(color="bright_black"),
    "detail": Style(color="bright_black"),
    "success": Style(color="green", bold=True),
}

GRAMMAR_STYLES = {
    StyleCategory.PLAIN: Style(),
    StyleCategory.PRODUCTION: Style(color="bright_cyan"),
    StyleCategory.TERMINAL: Style(color="green"),
    StyleCategory.EXTENDED_TERMINAL: Style(color="magenta"),
    StyleCategory.COMMENT: Style(color="bright_black", italic=True),
}


def format_diagnostic(diagnostic: Diagnostic) -> Text:
    """Build the styled text of one diagnostic, details included."""
    severity_style = STYLES["error"] if diagnostic.severity == Severity.ERROR else STYLES["warning"]
    where = str(diagnostic.location) if diagnostic.location is not None else "mdspec"

    text = Text()
    text.append(f"{where}: ", style=STYLES["location"])
    text.append(f"{diagnostic.severity.value} {diagnostic.code.value}", style=severity_style)
    text.append(f": {diagnostic.message}")
    for line in diagnostic.details:
        text.append(f"\n  {line}", style=STYLES["detail"])
    return text


def print_diagnostics(diagnostics: Sequence[Diagnostic], console: Console | None = None) -> None:
    """Print every diagnostic followed by an error/warning summary line."""
    out = console or default_console
    for diagnostic in diagnostics:
        out.print(format_diagnostic(diagnostic), highlight=False, soft_wrap=True)

    errors, warnings = count_by_severity(diagnostics)
    if not errors and not warnings:
        out.print(Text("✓ No problems found", style=STYLES["success"]))
        return
    summary = Text()
    summary.append(f"{errors} error{'s' if errors != 1 else ''}", style=STYLES["error"] if errors else None)
    summary.append(", ")
    summary.append(f"{warnings} warning{'s' if warnings != 1 else ''}", style=STYLES["warning"] if warnings else None)
    out.print(summary)


def grammar_text(lines: Sequence[ColorizedLine]) -> Text:
    """Join colorized grammar lines into one styled rich Text."""
    text = Text()
    for i, line in enumerate(lines):
        if i:
            text.append("\n")
        for word in line:
            text.append(word.text, style=GRAMMAR_STYLES[word.category])
    return text


def print_grammar(lines: Sequence[ColorizedLine], console: Console | None = None) -> None:
    out = console or default_console
    out.print(grammar_text(lines), highlight=False, soft_wrap=True)
