"""Tests for canonical grammar serialization."""

import pytest

from mdspec.core.grammar import Ebnf, EbnfKind, Grammar, Production, parse_grammar, serialize_grammar
from mdspec.core.grammar.serializer import escape_terminal, serialize_ebnf, serialize_production


class TestRoundTrip:
    """Canonical text survives parse + serialize unchanged."""

    def test_canonical_grammar(self, canonical_grammar_text: str) -> None:
        assert serialize_grammar(parse_grammar(canonical_grammar_text)) == canonical_grammar_text

    def test_multiline_choice_with_lf(self) -> None:
        text = "stat:\n\t| 'if' expr\n\t| 'while' expr\n\t;\n"
        assert serialize_grammar(parse_grammar(text)) == text

    def test_comment_inside_rule(self) -> None:
        text = "A:\t'x' //why\r\n\t'y';\r\n"
        assert serialize_grammar(parse_grammar(text)) == text

    def test_extended_terminal_and_escapes(self) -> None:
        text = "A:\t'<any character>' '\\'' '\\\\';\r\n"
        assert serialize_grammar(parse_grammar(text)) == text


class TestIdempotence:
    @pytest.mark.parametrize(
        "text",
        [
            "A : 'x'   B ;\nB:'y';",
            "A: (a|b)* | c+ ;",
            "// only a comment",
            "grammar G;\r\n\r\nA:\r\n  | x\r\n  | y\r\n  ;",
            "A: ((a b))?;",
            "A: | //c\r\n x;\r\nB: y;\r\n",
            "A: ( //c\r\n a b ) d;\r\nB: y;\r\n",
            "A: x //c",
            "A: ( //c\r\n a b )* e;",
        ],
    )
    def test_serialize_is_stable(self, text: str) -> None:
        once = serialize_grammar(parse_grammar(text))
        twice = serialize_grammar(parse_grammar(once))
        assert twice == once

    def test_normalizes_spacing(self) -> None:
        grammar = parse_grammar("A : 'x'   B ;\nB:'y';")
        assert serialize_grammar(grammar) == "A:\t'x' B;\nB:\t'y';\n"


class TestCommentsEndLines:
    """A comment inside a rule is always followed by a line break."""

    def test_comment_after_leading_pipe(self) -> None:
        grammar = parse_grammar("A: | //c\r\n x;\r\nB: y;\r\n")
        assert serialize_grammar(grammar) == "A:\tx //c\r\n\t;\r\nB:\ty;\r\n"

    def test_comment_after_open_paren(self) -> None:
        grammar = parse_grammar("A: ( //c\r\n a b ) d;\r\nB: y;\r\n")
        assert serialize_grammar(grammar) == "A:\ta b //c\r\n\td;\r\nB:\ty;\r\n"

    def test_comment_at_end_of_fragment(self) -> None:
        grammar = parse_grammar("A: x //c")
        assert grammar.productions[0].body.following_newline
        assert serialize_grammar(grammar) == "A:\tx //c\r\n\t;\r\n"

    def test_hand_built_node_with_comment(self) -> None:
        commented = Ebnf.ref("a").model_copy(update={"following_comment": "c"})
        node = Ebnf.sequence(commented, Ebnf.ref("b"))
        assert serialize_ebnf(node, "\n") == "a //c\n\tb"


class TestNodes:
    def test_sequence_parenthesizes_choice(self) -> None:
        node = Ebnf.sequence(Ebnf.ref("a"), Ebnf.choice(Ebnf.ref("b"), Ebnf.ref("c")))
        assert serialize_ebnf(node) == "a ( b | c )"

    def test_unary_parenthesizes_composite_child(self) -> None:
        node = Ebnf.unary(EbnfKind.ZERO_OR_ONE, Ebnf.sequence(Ebnf.ref("a"), Ebnf.ref("b")))
        assert serialize_ebnf(node) == "( a b )?"

    def test_unary_leaves_leaf_alone(self) -> None:
        node = Ebnf.unary(EbnfKind.ONE_OR_MORE, Ebnf.terminal("x"))
        assert serialize_ebnf(node) == "'x'+"

    def test_escape_terminal(self) -> None:
        assert escape_terminal("it's \\") == "it\\'s \\\\"


class TestProductions:
    def test_blank_and_comment(self) -> None:
        assert serialize_production(Production()) == "\r\n"
        assert serialize_production(Production(comment=" hi"), "\n") == "// hi\n"

    def test_rule_with_comment(self) -> None:
        production = Production(name="A", body=Ebnf.ref("b"), comment="c")
        assert serialize_production(production) == "A:\tb;  //c\r\n"

    def test_header_only_when_named(self) -> None:
        rules = [Production(name="A", body=Ebnf.ref("b"))]
        assert serialize_grammar(Grammar(productions=rules)) == "A:\tb;\r\n"
        assert serialize_grammar(Grammar(name="G", productions=rules)) == "grammar G;\r\nA:\tb;\r\n"
