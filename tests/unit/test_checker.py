"""End-to-end tests for checking specification documents against a grammar."""

from collections.abc import Callable

from mdspec.core.checker import check_spec
from mdspec.core.config import GrammarConfig, MdspecConfig
from mdspec.core.diagnostics import DiagnosticCode
from mdspec.core.document import SourceDocument
from mdspec.core.grammar import DifferenceKind, parse_grammar


class TestCheckSpec:
    def test_missing_production(self, statements_document: SourceDocument, authority_grammar_text: str) -> None:
        result = check_spec([statements_document], parse_grammar(authority_grammar_text))

        assert [(d.kind, d.name) for d in result.differences] == [
            (DifferenceKind.MISSING_IN_COPY, "while_statement")
        ]
        assert [d.format() for d in result.diagnostics] == [
            "G: error MD022: markdown lacks production 'while_statement'"
        ]
        assert result.has_errors

    def test_mismatch_is_located_in_markdown(
        self,
        make_statements_document: Callable[..., SourceDocument],
        authority_grammar_text: str,
    ) -> None:
        document = make_statements_document("if_statement: 'if' '(' expr ')' block;\n")
        result = check_spec([document], parse_grammar(authority_grammar_text))

        mismatch = [d for d in result.diagnostics if d.code == DiagnosticCode.PRODUCTION_MISMATCH]
        assert len(mismatch) == 1
        diagnostic = mismatch[0]
        assert str(diagnostic.location) == "statements.md(9-11)"
        assert diagnostic.message == "production 'if_statement' differs between markdown and G"
        assert diagnostic.details[0] == "G says if_statement:\t'if' expr block;\\r\\n"
        assert diagnostic.details[1] == "markdown says if_statement:\t'if' '(' expr ')' block;\\r\\n"

    def test_superfluous_production(self, make_statements_document: Callable[..., SourceDocument]) -> None:
        document = make_statements_document("if_statement: 'if' expr block;\nextra: 'x';\n")
        authority = parse_grammar("grammar G;\r\nif_statement:\t'if' expr block;\r\n")

        result = check_spec([document], authority)

        assert [d.code for d in result.diagnostics] == [DiagnosticCode.SUPERFLUOUS_PRODUCTION]
        assert str(result.diagnostics[0].location) == "statements.md(9-12)"

    def test_authority_is_linked(self, statements_document: SourceDocument, authority_grammar_text: str) -> None:
        result = check_spec([statements_document], parse_grammar(authority_grammar_text))

        assert result.authority is not None
        linked = result.authority.get("if_statement")
        unlinked = result.authority.get("while_statement")
        assert linked is not None and unlinked is not None
        assert linked.link == "statements.md#if-statement"
        assert unlinked.link is None

    def test_clean_check(self, statements_document: SourceDocument) -> None:
        authority = parse_grammar("grammar G;\nstart: if_statement;\nif_statement: 'if' expr block;\n")
        result = check_spec([statements_document], authority)
        assert result.differences == []
        assert result.diagnostics == []
        assert not result.has_errors

    def test_without_authority(self, make_statements_document: Callable[..., SourceDocument]) -> None:
        result = check_spec([make_statements_document("broken: (;\n")])
        assert result.authority is None
        assert result.differences == []
        assert [d.code for d in result.diagnostics] == [DiagnosticCode.GRAMMAR_SYNTAX]

    def test_reader_diagnostics_come_first(
        self,
        make_statements_document: Callable[..., SourceDocument],
        authority_grammar_text: str,
    ) -> None:
        document = make_statements_document("if_statement: ( 'if';\n")
        result = check_spec([document], parse_grammar(authority_grammar_text))
        assert [d.code for d in result.diagnostics] == [
            DiagnosticCode.GRAMMAR_SYNTAX,
            DiagnosticCode.MISSING_PRODUCTION,
            DiagnosticCode.MISSING_PRODUCTION,
        ]

    def test_configured_start_production(self, statements_document: SourceDocument) -> None:
        authority = parse_grammar("grammar G;\nunit: if_statement;\nif_statement: 'if' expr block;\n")
        config = MdspecConfig(grammar=GrammarConfig(start_production="unit"))
        assert check_spec([statements_document], authority, config).diagnostics == []
