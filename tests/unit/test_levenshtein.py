"""Tests for edit distance and edit-distance search."""

import pytest

from mdspec.core.fuzzy import levenshtein
from mdspec.core.span import Span

PAIRS = [
    ("", ""),
    ("", "abc"),
    ("kitten", "sitting"),
    ("flaw", "lawn"),
    ("same", "same"),
    (["the", "quick", "fox"], ["the", "slow", "brown", "fox"]),
]


class TestDistance:
    def test_known_values(self) -> None:
        assert levenshtein.distance("kitten", "sitting") == 3
        assert levenshtein.distance("flaw", "lawn") == 2
        assert levenshtein.distance(["a", "b"], ["a", "c", "b"]) == 1

    def test_empty_sequences(self) -> None:
        assert levenshtein.distance("", "") == 0
        assert levenshtein.distance("", "abc") == 3
        assert levenshtein.distance("abcd", "") == 4

    @pytest.mark.parametrize("x,y", PAIRS)
    def test_identity(self, x, y) -> None:
        assert levenshtein.distance(x, x) == 0

    @pytest.mark.parametrize("x,y", PAIRS)
    def test_symmetry(self, x, y) -> None:
        assert levenshtein.distance(x, y) == levenshtein.distance(y, x)

    @pytest.mark.parametrize("x,y", PAIRS)
    def test_bounded_by_longer_length(self, x, y) -> None:
        assert levenshtein.distance(x, y) <= max(len(x), len(y))


class TestSearch:
    def test_exact_word_match(self) -> None:
        assert levenshtein.search(["b", "c"], ["a", "b", "c", "d"]) == Span(1, 2)

    def test_exact_character_match(self) -> None:
        haystack = "haystack with needle inside"
        span = levenshtein.search("needle", haystack)
        assert span == Span(14, 6)
        assert span.slice(haystack) == "needle"

    def test_approximate_match(self) -> None:
        haystack = ["we", "see", "the", "goto", "statement", "here"]
        assert levenshtein.search(["the", "gotto", "statement"], haystack) == Span(2, 3)

    def test_match_at_edges(self) -> None:
        assert levenshtein.search(["a"], ["a", "b", "c"]) == Span(0, 1)
        assert levenshtein.search(["c"], ["a", "b", "c"]) == Span(2, 1)

    def test_tie_is_no_match(self) -> None:
        assert levenshtein.search("ab", "xabyab") is None
        assert levenshtein.search(["x"], ["a", "b"]) is None

    def test_empty_input_raises(self) -> None:
        with pytest.raises(ValueError):
            levenshtein.search([], ["a"])
        with pytest.raises(ValueError):
            levenshtein.search(["a"], [])
