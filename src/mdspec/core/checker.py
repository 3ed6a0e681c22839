"""
End-to-end consistency check of specification documents against an
authoritative grammar.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .config import MdspecConfig
from .diagnostics import Diagnostic, SourceLocation, count_by_severity, difference_diagnostic
from .document import SourceDocument
from .grammar import DifferenceKind, Grammar, GrammarDifference, compare_grammars, link_productions
from .spec_reader import BookmarkCounter, SpecDocument, read_spec

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    spec: SpecDocument
    authority: Grammar | None = None
    differences: list[GrammarDifference] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)


def _difference_location(
    difference: GrammarDifference,
    spec: SpecDocument,
    authority_name: str,
) -> SourceLocation | None:
    if difference.kind == DifferenceKind.MISSING_IN_COPY:
        return SourceLocation(authority_name) if authority_name else None
    return spec.locate_production(difference.name)


def check_spec(
    documents: Sequence[SourceDocument],
    authority: Grammar | None = None,
    config: MdspecConfig | None = None,
    counter: BookmarkCounter | None = None,
) -> CheckResult:
    """
    Read the documents and compare their grammar with ``authority``.

    Without an authority only the reader's own diagnostics are returned.
    Never raises for malformed fragments or grammar differences; both end
    up in ``diagnostics``.
    """
    config = config or MdspecConfig()
    spec = read_spec(documents, config, counter)
    result = CheckResult(spec=spec, diagnostics=list(spec.diagnostics))
    if authority is None:
        return result

    authority_name = authority.name or "grammar"
    result.differences = compare_grammars(authority, spec.grammar, config.grammar.start_production)
    result.authority = link_productions(authority, spec.grammar)
    for difference in result.differences:
        location = _difference_location(difference, spec, authority.name)
        result.diagnostics.append(difference_diagnostic(difference, authority_name, location))

    errors, warnings = count_by_severity(result.diagnostics)
    logger.info(
        "Checked %d documents against %s: %d differences, %d errors, %d warnings",
        len(documents),
        authority_name,
        len(result.differences),
        errors,
        warnings,
    )
    return result
