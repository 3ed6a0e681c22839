"""
Style-annotated rendering of grammar IR for the document writer.

The writer receives lines of ``ColorizedWord`` and maps each category to
its own run formatting; nothing here knows about the output format.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .ir import UNARY_OPERATORS, Ebnf, EbnfKind, Grammar, Production
from .parser import parse_grammar
from .serializer import escape_terminal


class StyleCategory(str, Enum):
    """How a word of grammar text should be styled."""

    PLAIN = "plain"
    PRODUCTION = "production"
    TERMINAL = "terminal"
    EXTENDED_TERMINAL = "extended_terminal"
    COMMENT = "comment"


@dataclass(frozen=True)
class ColorizedWord:
    text: str
    category: StyleCategory = StyleCategory.PLAIN


ColorizedLine = list[ColorizedWord]

# Marks a line break in the word stream
_BREAK = None


def _word(text: str, category: StyleCategory = StyleCategory.PLAIN) -> ColorizedWord:
    return ColorizedWord(text, category)


def _ebnf_words(node: Ebnf) -> Iterator[ColorizedWord | None]:
    if node.kind == EbnfKind.TERMINAL:
        yield _word(f"'{escape_terminal(node.text)}'", StyleCategory.TERMINAL)

    elif node.kind == EbnfKind.EXTENDED_TERMINAL:
        yield _word(node.text, StyleCategory.EXTENDED_TERMINAL)

    elif node.kind == EbnfKind.REFERENCE:
        yield _word(node.text, StyleCategory.PRODUCTION)

    elif node.is_unary:
        child = node.children[0]
        if child.is_composite:
            yield _word("( ")
            yield from _ebnf_words(child)
            yield _word(" )")
        else:
            yield from _ebnf_words(child)
        yield _word(UNARY_OPERATORS[node.kind])

    elif node.kind == EbnfKind.CHOICE:
        for i, child in enumerate(node.children):
            if i > 0:
                yield _word("| ")
            yield from _ebnf_words(child)

    else:
        after_tab = False
        for child in node.children:
            if after_tab:
                yield _word("  ")
            if child.kind == EbnfKind.CHOICE:
                yield _word("( ")
                yield from _ebnf_words(child)
                yield _word(" )")
                after_tab = False
            else:
                for word in _ebnf_words(child):
                    yield word
                    after_tab = word is not None and word.text == "\t"

    if node.following_whitespace:
        yield _word(node.following_whitespace)
    if node.following_comment:
        yield _word(f" //{node.following_comment}", StyleCategory.COMMENT)
    if node.following_newline or node.following_comment:
        yield _BREAK
        yield _word("\t")


def _production_words(production: Production) -> Iterator[ColorizedWord | None]:
    if production.body is None:
        if production.comment:
            yield _word(f"//{production.comment}", StyleCategory.COMMENT)
        yield _BREAK
        return

    yield _word(production.name or "", StyleCategory.PRODUCTION)
    yield _word(":")
    if production.rule_starts_on_newline:
        yield _BREAK
        yield _word("\t| ")
    else:
        yield _word(" ")
    yield from _ebnf_words(production.body)
    yield _word(";")
    if production.comment:
        yield _word(f"  //{production.comment}", StyleCategory.COMMENT)
    yield _BREAK


def words_to_lines(words: Iterator[ColorizedWord | None]) -> list[ColorizedLine]:
    """Split a word stream at line-break markers."""
    lines: list[ColorizedLine] = []
    current: ColorizedLine = []
    for word in words:
        if word is _BREAK:
            lines.append(current)
            current = []
        else:
            current.append(word)
    if current:
        lines.append(current)
    return lines


def colorize_grammar(grammar: Grammar) -> list[ColorizedLine]:
    """Render a parsed grammar as styled lines."""

    def words() -> Iterator[ColorizedWord | None]:
        for production in grammar.productions:
            yield from _production_words(production)

    return words_to_lines(words())


def colorize(text: str) -> list[ColorizedLine]:
    """
    Parse a grammar fragment and render it as styled lines.

    Raises:
        GrammarSyntaxError: If the fragment is malformed
    """
    return colorize_grammar(parse_grammar(text, source="<code block>"))
