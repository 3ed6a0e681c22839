"""Tests for grammar comparison and linking."""

from mdspec.core.grammar import DifferenceKind, GrammarDifference, compare_grammars, link_productions, parse_grammar


def names(differences: list[GrammarDifference], kind: DifferenceKind) -> list[str]:
    return [d.name for d in differences if d.kind == kind]


class TestCompareGrammars:
    def test_mismatch_and_missing(self) -> None:
        authority = parse_grammar("grammar G; start: A; A: 'x' B; B: 'y';")
        copy = parse_grammar("B: 'z';")

        differences = compare_grammars(authority, copy)

        assert [d.kind for d in differences] == [DifferenceKind.MISMATCH, DifferenceKind.MISSING_IN_COPY]
        mismatch, missing = differences
        assert mismatch.name == "B"
        assert mismatch.authority_text == "B:\t'y';\r\n"
        assert mismatch.copy_text == "B:\t'z';\r\n"
        assert missing.name == "A"

    def test_identical_grammars(self) -> None:
        text = "A: 'x' B;\nB: 'y';"
        assert compare_grammars(parse_grammar(text), parse_grammar(text)) == []

    def test_formatting_differences_are_ignored(self) -> None:
        authority = parse_grammar("A:\t'x' B;\r\n")
        copy = parse_grammar("A :  'x'    B ;\n")
        assert compare_grammars(authority, copy) == []

    def test_extra_in_copy(self) -> None:
        differences = compare_grammars(parse_grammar("A: a;"), parse_grammar("A: a; Z: z;"))
        assert differences == [GrammarDifference.extra_in_copy("Z")]

    def test_start_is_never_missing_or_extra(self) -> None:
        differences = compare_grammars(parse_grammar("start: A; A: a;"), parse_grammar("A: a;"))
        assert differences == []
        differences = compare_grammars(parse_grammar("A: a;"), parse_grammar("start: A; A: a;"))
        assert differences == []

    def test_custom_start_production(self) -> None:
        differences = compare_grammars(
            parse_grammar("compilation_unit: A; A: a;"),
            parse_grammar("A: a;"),
            start_production="compilation_unit",
        )
        assert differences == []

    def test_symmetry(self) -> None:
        a = parse_grammar("A: a; B: b; C: c;")
        b = parse_grammar("B: b; D: d;")
        forward = compare_grammars(a, b)
        backward = compare_grammars(b, a)
        assert names(forward, DifferenceKind.MISSING_IN_COPY) == names(backward, DifferenceKind.EXTRA_IN_COPY)
        assert names(forward, DifferenceKind.EXTRA_IN_COPY) == names(backward, DifferenceKind.MISSING_IN_COPY)

    def test_last_duplicate_wins(self) -> None:
        authority = parse_grammar("A: 'new';")
        copy = parse_grammar("A: 'old'; A: 'new';")
        assert compare_grammars(authority, copy) == []

    def test_comments_are_not_productions(self) -> None:
        authority = parse_grammar("// header\r\nA: a;")
        copy = parse_grammar("A: a;\r\n\r\n// trailer")
        assert compare_grammars(authority, copy) == []


class TestLinkProductions:
    def test_links_copied_by_name(self) -> None:
        authority = parse_grammar("A: a; B: b;")
        copy = parse_grammar("A: a;")
        copy = copy.model_copy(
            update={
                "productions": [
                    p.model_copy(update={"link": "x.md#a", "link_name": "Section A"}) for p in copy.productions
                ]
            }
        )

        linked = link_productions(authority, copy)

        a = linked.get("A")
        b = linked.get("B")
        assert a is not None and b is not None
        assert (a.link, a.link_name) == ("x.md#a", "Section A")
        assert b.link is None
        assert authority.get("A").link is None
