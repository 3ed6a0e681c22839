"""Shared pytest fixtures for mdspec tests."""

from collections.abc import Callable

import pytest

from mdspec.core.document import CodeBlock, Heading, Paragraph, SourceDocument, Text

CANONICAL_GRAMMAR = (
    "grammar G;\r\n"
    "A:\t'x' B;\r\n"
    "B:\t'y'?;  //note\r\n"
    "\r\n"
    "// comment line\r\n"
    "C:\t( 'a' | 'b' )* c+;\r\n"
)

AUTHORITY_GRAMMAR = (
    "grammar G;\r\n"
    "start:\tstatement;\r\n"
    "if_statement:\t'if' expr block;\r\n"
    "while_statement:\t'while' expr block;\r\n"
)

IF_STATEMENT = "if_statement: 'if' expr block;\n"


def statements_text(code: str) -> str:
    return (
        "# Statements\n"
        "\n"
        "Statements do things.\n"
        "\n"
        "## If statement\n"
        "\n"
        "The if statement.\n"
        "\n"
        "```antlr\n"
        f"{code}"
        "```\n"
    )


@pytest.fixture
def canonical_grammar_text() -> str:
    """Grammar text already in the serializer's canonical layout."""
    return CANONICAL_GRAMMAR


@pytest.fixture
def authority_grammar_text() -> str:
    return AUTHORITY_GRAMMAR


@pytest.fixture
def make_statements_document() -> Callable[..., SourceDocument]:
    """Build statements.md with the given grammar code block."""

    def make(code: str = IF_STATEMENT) -> SourceDocument:
        return SourceDocument(
            filename="statements.md",
            text=statements_text(code),
            blocks=[
                Heading(1, [Text("Statements")]),
                Paragraph([Text("Statements do things.")]),
                Heading(2, [Text("If statement")]),
                Paragraph([Text("The if statement.")]),
                CodeBlock(code, language="antlr"),
            ],
        )

    return make


@pytest.fixture
def statements_document(make_statements_document: Callable[..., SourceDocument]) -> SourceDocument:
    return make_statements_document()
