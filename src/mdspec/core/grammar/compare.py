"""
Consistency check between an authoritative grammar and a copy of it.

Two productions are considered equal when their canonical serializations
are equal, so formatting that the serializer normalizes never shows up
as a difference.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .ir import Grammar, Production
from .serializer import DEFAULT_NEWLINE, serialize_production

logger = logging.getLogger(__name__)

DEFAULT_START_PRODUCTION = "start"


class DifferenceKind(str, Enum):
    """Kinds of grammar difference."""

    EXTRA_IN_COPY = "extra_in_copy"
    MISSING_IN_COPY = "missing_in_copy"
    MISMATCH = "mismatch"


class GrammarDifference(BaseModel):
    """
    One detected difference between the authority and the copy.

    ``authority_text`` and ``copy_text`` hold the canonical production text
    from each side; the side that lacks the production has ``None``.
    """

    kind: DifferenceKind
    name: str
    authority_text: str | None = None
    copy_text: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def extra_in_copy(cls, name: str) -> "GrammarDifference":
        return cls(kind=DifferenceKind.EXTRA_IN_COPY, name=name)

    @classmethod
    def missing_in_copy(cls, name: str) -> "GrammarDifference":
        return cls(kind=DifferenceKind.MISSING_IN_COPY, name=name)

    @classmethod
    def mismatch(cls, name: str, authority_text: str, copy_text: str) -> "GrammarDifference":
        return cls(
            kind=DifferenceKind.MISMATCH,
            name=name,
            authority_text=authority_text,
            copy_text=copy_text,
        )


def _by_name(grammar: Grammar) -> dict[str, Production]:
    """Map names to productions; a later duplicate replaces an earlier one."""
    productions: dict[str, Production] = {}
    for production in grammar.productions:
        if production.name is not None:
            productions[production.name] = production
    return productions


def compare_grammars(
    authority: Grammar,
    copy: Grammar,
    start_production: str = DEFAULT_START_PRODUCTION,
) -> list[GrammarDifference]:
    """
    Compare two grammars production by production.

    Returns mismatches (in authority order), then productions missing from
    the copy, then productions only in the copy. ``start_production`` is
    never reported as missing or extra.
    """
    in_authority = _by_name(authority)
    in_copy = _by_name(copy)
    differences: list[GrammarDifference] = []

    for name, production in in_authority.items():
        if name not in in_copy:
            continue
        authority_text = serialize_production(production, DEFAULT_NEWLINE)
        copy_text = serialize_production(in_copy[name], DEFAULT_NEWLINE)
        if authority_text != copy_text:
            differences.append(GrammarDifference.mismatch(name, authority_text, copy_text))

    for name in in_authority:
        if name != start_production and name not in in_copy:
            differences.append(GrammarDifference.missing_in_copy(name))

    for name in in_copy:
        if name != start_production and name not in in_authority:
            differences.append(GrammarDifference.extra_in_copy(name))

    logger.debug(
        "Compared %s against %s: %d differences",
        authority.name or "<authority>",
        copy.name or "<copy>",
        len(differences),
    )
    return differences


def link_productions(authority: Grammar, copy: Grammar) -> Grammar:
    """
    Return ``authority`` with each rule's link copied from the first
    same-named rule of ``copy``; rules absent from the copy are unlinked.
    """
    productions = []
    for production in authority.productions:
        if production.name is None:
            productions.append(production)
            continue
        source = copy.get(production.name)
        productions.append(
            production.model_copy(
                update={
                    "link": source.link if source else None,
                    "link_name": source.link_name if source else None,
                }
            )
        )
    return authority.model_copy(update={"productions": productions})
