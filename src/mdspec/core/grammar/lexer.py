"""
Lexer for the grammar notation.

Converts grammar text into a flat list of tokens with source locations.
Unlike most lexers it keeps intra-line whitespace, line ends and line
comments as tokens, so the parser can attach them to the grammar nodes
and the serializer can reproduce the source layout.
"""

from dataclasses import dataclass
from enum import Enum

from ..errors import make_grammar_error


class TokenType(Enum):
    """Token types in the grammar notation."""

    WORD = "WORD"  # production names, references and the 'grammar' keyword
    TERMINAL = "TERMINAL"  # 'quoted' text, value is unescaped
    COMMENT = "COMMENT"  # // to end of line, value includes the slashes
    WHITESPACE = "WHITESPACE"  # run of spaces/tabs within one line
    NEWLINE = "NEWLINE"  # \r\n, \r or \n

    COLON = ":"
    SEMICOLON = ";"
    PIPE = "|"
    STAR = "*"
    PLUS = "+"
    QUESTION = "?"
    LPAREN = "("
    RPAREN = ")"

    EOF = "EOF"


OPERATORS: dict[str, TokenType] = {
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "|": TokenType.PIPE,
    "*": TokenType.STAR,
    "+": TokenType.PLUS,
    "?": TokenType.QUESTION,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

TRIVIA = frozenset({TokenType.COMMENT, TokenType.WHITESPACE, TokenType.NEWLINE})

# Characters that end a bareword, in addition to whitespace and "//"
_WORD_STOPS = frozenset(":*?|+;()'\r\n")

_TERMINAL_ESCAPES = ("\\", "'", '"')


@dataclass
class Token:
    """
    A single token of grammar text.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    @property
    def is_trivia(self) -> bool:
        return self.type in TRIVIA

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for grammar notation.

    Leading and trailing whitespace of the whole text is ignored.
    """

    def __init__(self, text: str, source: str = "<grammar>"):
        """
        Initialize lexer.

        Args:
            text: Grammar text to tokenize
            source: Name of the text (for error reporting)
        """
        self.text = text
        self.source = source
        self.end = len(text.rstrip())
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= self.end:
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= self.end:
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < self.end:
            ch = self.text[self.pos]
            if ch == "\n" or (ch == "\r" and self.peek_char() != "\n"):
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def source_line(self, line: int) -> str:
        """Return the text of a 1-indexed line, for error snippets."""
        lines = self.text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        if 1 <= line <= len(lines):
            return lines[line - 1]
        return ""

    def error(self, message: str, line: int, column: int) -> Exception:
        return make_grammar_error(message, self.source, line, column, self.source_line(line))

    def at_comment(self) -> bool:
        return self.current_char() == "/" and self.peek_char() == "/"

    def read_comment(self) -> str:
        """Read a // comment up to (not including) the end of the line."""
        line, column = self.line, self.column
        chars = []
        while self.current_char() is not None and self.current_char() not in "\r\n":
            chars.append(self.current_char())
            self.advance()
        comment = "".join(chars)
        if "*)" in comment:
            raise self.error("Comments may not include '*)'", line, column)
        return comment

    def read_terminal(self) -> str:
        """Read a single-quoted terminal and return its unescaped text."""
        start_line, start_col = self.line, self.column
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None:
                raise self.error("Unterminated terminal", start_line, start_col)
            if current == "'":
                self.advance()
                break
            if current in "\r\n":
                raise self.error("Terminals must be single-line", start_line, start_col)
            if current == "\\":
                escaped = self.peek_char()
                if escaped not in _TERMINAL_ESCAPES:
                    raise self.error(
                        "Terminals may not include \\ except in \\\\ or \\' or \\\"",
                        self.line,
                        self.column,
                    )
                chars.append(escaped)
                self.advance()
                self.advance()
            else:
                chars.append(current)
                self.advance()

        return "".join(chars)

    def read_word(self) -> str:
        """Read a bareword: anything up to whitespace, an operator, a quote or //."""
        chars = []
        current = self.current_char()
        while (
            current is not None
            and not current.isspace()
            and current not in _WORD_STOPS
            and not self.at_comment()
        ):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_whitespace(self) -> str:
        """Read a run of whitespace that does not cross a line end."""
        chars = []
        current = self.current_char()
        while current is not None and current not in "\r\n" and current.isspace():
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire grammar text.

        Returns:
            List of tokens ending with EOF

        Raises:
            GrammarSyntaxError: If a terminal or comment is malformed
        """
        # Skip leading whitespace, keeping line numbers right
        while self.current_char() is not None and self.current_char().isspace():
            self.advance()

        while self.pos < self.end:
            ch = self.current_char()
            token_line = self.line
            token_col = self.column

            if ch == "\r" and self.peek_char() == "\n":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.NEWLINE, "\r\n", token_line, token_col))

            elif ch in "\r\n":
                self.advance()
                self.tokens.append(Token(TokenType.NEWLINE, ch, token_line, token_col))

            elif ch in OPERATORS:
                self.advance()
                self.tokens.append(Token(OPERATORS[ch], ch, token_line, token_col))

            elif self.at_comment():
                value = self.read_comment()
                self.tokens.append(Token(TokenType.COMMENT, value, token_line, token_col))

            elif ch == "'":
                value = self.read_terminal()
                self.tokens.append(Token(TokenType.TERMINAL, value, token_line, token_col))

            else:
                value = self.read_word()
                if not value:
                    raise self.error(f"Unexpected character: {ch!r}", token_line, token_col)
                self.tokens.append(Token(TokenType.WORD, value, token_line, token_col))

            ws_line, ws_col = self.line, self.column
            whitespace = self.read_whitespace()
            if whitespace:
                self.tokens.append(Token(TokenType.WHITESPACE, whitespace, ws_line, ws_col))

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, source: str = "<grammar>") -> list[Token]:
    """
    Convenience function to tokenize grammar text.

    Args:
        text: Grammar text
        source: Name of the text, used in error messages

    Returns:
        List of tokens
    """
    return Lexer(text, source).tokenize()
