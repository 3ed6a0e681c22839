"""Tests for grammar colorization."""

import pytest

from mdspec.core.errors import GrammarSyntaxError
from mdspec.core.grammar import (
    StyleCategory,
    colorize,
    colorize_grammar,
    parse_grammar,
    serialize_grammar,
)


def plain(lines) -> list[str]:
    return ["".join(word.text for word in line) for line in lines]


class TestColorize:
    def test_categories(self) -> None:
        lines = colorize("A: 'x' B;")
        assert len(lines) == 1
        words = [(w.text, w.category) for w in lines[0]]
        assert words == [
            ("A", StyleCategory.PRODUCTION),
            (":", StyleCategory.PLAIN),
            (" ", StyleCategory.PLAIN),
            ("'x'", StyleCategory.TERMINAL),
            (" ", StyleCategory.PLAIN),
            ("B", StyleCategory.PRODUCTION),
            (";", StyleCategory.PLAIN),
        ]

    def test_extended_terminal_and_comment(self) -> None:
        lines = colorize("A: '<letter>';  // note")
        categories = {w.category for w in lines[0]}
        assert StyleCategory.EXTENDED_TERMINAL in categories
        assert StyleCategory.COMMENT in categories
        assert plain(lines) == ["A: letter;  // note"]

    def test_comment_inside_rule_breaks_line(self) -> None:
        lines = colorize("A: | //c\r\n x;")
        assert plain(lines) == ["A: x //c", "\t;"]
        assert lines[0][-1].category == StyleCategory.COMMENT

    def test_full_line_comment_matches_serializer(self) -> None:
        grammar = parse_grammar("//c\r\n// d\r\nA: a;\r\n")
        assert plain(colorize_grammar(grammar))[:2] == ["//c", "// d"]
        assert serialize_grammar(grammar).startswith("//c\r\n// d\r\n")

    def test_line_per_production(self) -> None:
        lines = colorize_grammar(parse_grammar("// c\r\nA: a;\r\nB: b;"))
        assert plain(lines) == ["// c", "A: a;", "B: b;"]

    def test_multiline_rule(self) -> None:
        lines = colorize("stat:\n\t| a\n\t| b\n\t;")
        assert plain(lines) == ["stat:", "\t| a", "\t| b", "\t;"]

    def test_structure_is_unchanged(self) -> None:
        grammar = parse_grammar("A: ( a | b )* c;")
        before = grammar.model_dump()
        colorize_grammar(grammar)
        assert grammar.model_dump() == before

    def test_malformed_fragment_raises(self) -> None:
        with pytest.raises(GrammarSyntaxError):
            colorize("A: (a;")
