"""
Grammar notation: IR, lexer, parser, serializer, colorizer and comparison.
"""

from .colorize import ColorizedLine, ColorizedWord, StyleCategory, colorize, colorize_grammar
from .compare import DifferenceKind, GrammarDifference, compare_grammars, link_productions
from .ir import Ebnf, EbnfKind, Grammar, Production
from .parser import load_grammar, parse_grammar
from .serializer import serialize_ebnf, serialize_grammar, serialize_production

__all__ = [
    "ColorizedLine",
    "ColorizedWord",
    "DifferenceKind",
    "Ebnf",
    "EbnfKind",
    "Grammar",
    "GrammarDifference",
    "Production",
    "StyleCategory",
    "colorize",
    "colorize_grammar",
    "compare_grammars",
    "link_productions",
    "load_grammar",
    "parse_grammar",
    "serialize_ebnf",
    "serialize_grammar",
    "serialize_production",
]
