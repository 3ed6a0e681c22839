"""
Recursive-descent parser for the grammar notation.

Grammar of the notation, lowest binding first:

    grammar     ::= ( header | comment | blank | production )*
    header      ::= 'grammar' WORD ';'
    production  ::= WORD ':' choice ';' comment*
    choice      ::= '|'? sequence ( '|' sequence )*
    sequence    ::= unary unary*
    unary       ::= atom ( '+' | '*' | '?' )*
    atom        ::= '(' choice ')' | TERMINAL | WORD

Whitespace, comments and line ends between tokens are collected by
``skip_trivia`` and attached to the node completed just before them.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import GrammarSyntaxError, make_grammar_error
from .ir import Ebnf, EbnfKind, Grammar, Production
from .lexer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)

_POSTFIX: dict[TokenType, EbnfKind] = {
    TokenType.PLUS: EbnfKind.ONE_OR_MORE,
    TokenType.STAR: EbnfKind.ZERO_OR_MORE,
    TokenType.QUESTION: EbnfKind.ZERO_OR_ONE,
}

_SEQUENCE_END = frozenset({TokenType.PIPE, TokenType.SEMICOLON, TokenType.RPAREN, TokenType.EOF})


@dataclass(frozen=True)
class Trivia:
    """Formatting found between two significant tokens."""

    whitespace: str = ""
    comment: str = ""
    newline: bool = False

    def __bool__(self) -> bool:
        return bool(self.whitespace or self.comment or self.newline)


def attach_trivia(node: Ebnf, trivia: Trivia) -> Ebnf:
    """Return ``node`` with ``trivia`` appended to its trailing formatting."""
    if not trivia:
        return node
    comment = node.following_comment
    if comment and trivia.comment:
        comment = f"{comment} {trivia.comment}"
    else:
        comment = comment or trivia.comment
    return node.model_copy(
        update={
            "following_whitespace": node.following_whitespace + trivia.whitespace,
            "following_comment": comment,
            "following_newline": node.following_newline or trivia.newline,
        }
    )


class BaseParser:
    """
    Token navigation for recursive descent.

    The token list is never modified; ``pos`` is the only parser state.
    """

    def __init__(self, tokens: list[Token], source: str):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
            source: Source name (for error reporting)
        """
        self.tokens = tokens
        self.source = source
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def error(self, message: str, token: Token | None = None) -> GrammarSyntaxError:
        token = token or self.current_token()
        return make_grammar_error(message, self.source, token.line, token.column)

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            GrammarSyntaxError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error(f"Expected {token_type.value!r}, got {_describe(token)}", token)
        return self.advance()


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of grammar"
    if token.type == TokenType.NEWLINE:
        return "end of line"
    return repr(token.value)


class GrammarParser(BaseParser):
    """Parser producing ``Production`` records from grammar tokens."""

    def __init__(self, tokens: list[Token], source: str):
        super().__init__(tokens, source)
        self.grammar_name: str | None = None

    def skip_trivia(self) -> Trivia:
        """Consume whitespace, comments and line ends, returning what was seen."""
        whitespace = ""
        comment = ""
        newline = False
        while True:
            token = self.current_token()
            if token.type == TokenType.COMMENT:
                comment += token.value[2:]
            elif token.type == TokenType.NEWLINE:
                newline = True
                if comment:
                    comment += " "
            elif token.type == TokenType.WHITESPACE:
                # Indentation after a line break is re-created by the serializer
                if not newline:
                    whitespace += token.value
            else:
                break
            self.advance()
        # A comment always ends its line, even the last one
        return Trivia(whitespace, comment.rstrip(), newline or bool(comment))

    def skip_whitespace(self) -> None:
        while self.match(TokenType.WHITESPACE):
            self.advance()

    def parse(self) -> list[Production]:
        """Parse all productions in source order."""
        productions: list[Production] = []
        while not self.match(TokenType.EOF):
            token = self.current_token()
            if token.type == TokenType.WORD and token.value == "grammar" and self._is_header():
                self.parse_header()
            elif token.type == TokenType.COMMENT:
                self.advance()
                productions.append(Production(comment=token.value[2:]))
                self.skip_whitespace()
                if self.match(TokenType.NEWLINE):
                    self.advance()
            elif token.type == TokenType.NEWLINE:
                self.advance()
                productions.append(Production())
            elif token.type == TokenType.WHITESPACE:
                self.advance()
            elif token.type == TokenType.WORD:
                productions.append(self.parse_production())
            elif token.type == TokenType.RPAREN:
                raise self.error("Mismatched parentheses: unexpected ')'")
            else:
                raise self.error(f"Expected a production name, got {_describe(token)}")
        return productions

    def _is_header(self) -> bool:
        """'grammar X;' is a header, 'grammar: ...' is a production."""
        offset = 1
        while self.peek_token(offset).type == TokenType.WHITESPACE:
            offset += 1
        return self.peek_token(offset).type == TokenType.WORD

    def parse_header(self) -> None:
        self.advance()  # 'grammar'
        self.skip_whitespace()
        self.grammar_name = self.expect(TokenType.WORD).value
        self.skip_whitespace()
        self.expect(TokenType.SEMICOLON)
        self.skip_whitespace()
        if self.match(TokenType.NEWLINE):
            self.advance()

    def parse_production(self) -> Production:
        name_token = self.advance()
        name = name_token.value

        starts_on_newline = False
        while self.match(TokenType.WHITESPACE, TokenType.NEWLINE):
            starts_on_newline = starts_on_newline or self.match(TokenType.NEWLINE)
            self.advance()
        if not self.match(TokenType.COLON):
            raise self.error(f"After '{name}' expected ':', got {_describe(self.current_token())}")
        self.advance()

        leading = self.skip_trivia()
        comment = leading.comment
        body = self.parse_choice()
        body = attach_trivia(body, self.skip_trivia())

        token = self.current_token()
        if token.type == TokenType.SEMICOLON:
            self.advance()
        elif token.type == TokenType.RPAREN:
            raise self.error("Mismatched parentheses: unexpected ')'")
        elif token.type != TokenType.EOF:
            raise self.error(f"Expected ';' after production '{name}', got {_describe(token)}")

        # Comments on the same line as the closing ';'
        self.skip_whitespace()
        while self.match(TokenType.COMMENT):
            comment += self.advance().value[2:]
            self.skip_whitespace()
        if self.match(TokenType.NEWLINE):
            self.advance()

        return Production(
            name=name,
            body=body,
            comment=comment,
            rule_starts_on_newline=starts_on_newline or leading.newline,
        )

    def parse_choice(self) -> Ebnf:
        leading = Trivia()
        if self.match(TokenType.PIPE):
            self.advance()
            leading = self.skip_trivia()

        alternatives = [self.parse_sequence()]
        if leading.comment:
            alternatives[0] = attach_trivia(
                alternatives[0], Trivia(comment=leading.comment, newline=leading.newline)
            )

        while self.match(TokenType.PIPE):
            self.advance()
            # A line break after '|' belongs to the alternative before it
            trivia = self.skip_trivia()
            alternatives[-1] = attach_trivia(
                alternatives[-1], Trivia(comment=trivia.comment, newline=trivia.newline)
            )
            alternatives.append(self.parse_sequence())

        return Ebnf.choice(*alternatives)

    def parse_sequence(self) -> Ebnf:
        items = [self.parse_unary()]
        while not self.match(*_SEQUENCE_END):
            items[-1] = attach_trivia(items[-1], self.skip_trivia())
            if self.match(*_SEQUENCE_END):
                break
            items.append(self.parse_unary())
        return Ebnf.sequence(*items)

    def parse_unary(self) -> Ebnf:
        node = self.parse_atom()
        while self.current_token().type in _POSTFIX:
            kind = _POSTFIX[self.advance().type]
            node = attach_trivia(Ebnf.unary(kind, node), self.skip_trivia())
        return node

    def parse_atom(self) -> Ebnf:
        token = self.current_token()

        if token.type == TokenType.LPAREN:
            self.advance()
            leading = self.skip_trivia()
            inner = self.parse_choice()
            if not self.match(TokenType.RPAREN):
                raise self.error(
                    f"Mismatched parentheses: expected ')', got {_describe(self.current_token())}"
                )
            self.advance()
            if leading.comment:
                inner = attach_trivia(
                    inner, Trivia(comment=leading.comment, newline=leading.newline)
                )
            return attach_trivia(inner, self.skip_trivia())

        if token.type == TokenType.TERMINAL:
            self.advance()
            node = self._terminal(token)
            return attach_trivia(node, self.skip_trivia())

        if token.type == TokenType.WORD:
            self.advance()
            return attach_trivia(Ebnf.ref(token.value), self.skip_trivia())

        if token.type == TokenType.RPAREN:
            raise self.error("Mismatched parentheses: unexpected ')'", token)
        raise self.error(f"Expected a terminal, reference or '(', got {_describe(token)}", token)

    def _terminal(self, token: Token) -> Ebnf:
        text = token.value
        if len(text) >= 2 and text.startswith("<") and text.endswith(">"):
            special = text[1:-1]
            if not special:
                raise self.error("A terminal may not be '<>'", token)
            if "?" in special:
                raise self.error("A special-terminal may not contain a question-mark '?'", token)
            return Ebnf.extended(special)
        if "'" in text and '"' in text:
            raise self.error("A terminal must either contain no ' or no \"", token)
        return Ebnf.terminal(text)


def parse_grammar(text: str, name: str = "", source: str | None = None) -> Grammar:
    """
    Parse grammar notation into a Grammar.

    Args:
        text: Grammar text
        name: Grammar name used when the text has no 'grammar X;' header
        source: Name of the text for error messages (defaults to ``name``)

    Returns:
        Grammar with productions in source order

    Raises:
        GrammarSyntaxError: If the text is malformed
    """
    source = source or name or "<grammar>"
    tokens = tokenize(text, source)
    parser = GrammarParser(tokens, source)
    productions = parser.parse()

    newline = next((t.value for t in tokens if t.type == TokenType.NEWLINE), "\r\n")
    grammar = Grammar(
        name=parser.grammar_name or name,
        productions=productions,
        newline=newline,
    )
    logger.debug(
        "Parsed grammar %r from %s: %d productions",
        grammar.name,
        source,
        len(grammar.rules()),
    )
    return grammar


def load_grammar(path: Path) -> Grammar:
    """
    Read and parse a grammar file.

    The grammar is named after its header, or after the file stem when the
    file has none.
    """
    text = path.read_text(encoding="utf-8")
    return parse_grammar(text, name=path.stem, source=str(path))
