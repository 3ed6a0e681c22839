"""
Edit distance and edit-distance substring search over token sequences.

Both work on any sequences whose elements compare with ``==``: strings
(character level) or lists of words (word level).
"""

import logging
from collections.abc import Sequence
from typing import TypeVar

from ..span import Span

logger = logging.getLogger(__name__)

T = TypeVar("T")


def distance(x: Sequence[T], y: Sequence[T]) -> int:
    """
    Levenshtein distance with unit costs.

    Keeps only the current and the next row of the DP matrix, so memory
    is O(len(y)).
    """
    if not x:
        return len(y)
    if not y:
        return len(x)

    current = list(range(len(y) + 1))
    following = [0] * (len(y) + 1)
    for i in range(1, len(x) + 1):
        following[0] = i
        for j in range(1, len(y) + 1):
            following[j] = min(
                current[j] + 1,
                following[j - 1] + 1,
                current[j - 1] + (0 if x[i - 1] == y[j - 1] else 1),
            )
        current, following = following, current

    return current[len(y)]


def _best_end(needle: Sequence[T], haystack: Sequence[T]) -> int | None:
    """
    Return the haystack index just past the best match of ``needle``,
    or None when several end positions tie.
    """
    if not needle:
        raise ValueError("needle must be non-empty")
    if not haystack:
        raise ValueError("haystack must be non-empty")

    # A zero first row lets a match start anywhere in the haystack for free
    current = [0] * (len(haystack) + 1)
    following = [0] * (len(haystack) + 1)
    for i in range(1, len(needle) + 1):
        following[0] = i
        for j in range(1, len(haystack) + 1):
            following[j] = min(
                current[j] + 1,
                following[j - 1] + 1,
                current[j - 1] + (0 if needle[i - 1] == haystack[j - 1] else 1),
            )
        current, following = following, current

    best = min(current)
    ends = [j for j, score in enumerate(current) if score == best]
    if len(ends) != 1:
        logger.debug("Ambiguous match: %d end positions at distance %d", len(ends), best)
        return None
    return ends[0]


def search(needle: Sequence[T], haystack: Sequence[T]) -> Span | None:
    """
    Find the range of ``haystack`` closest to ``needle`` in edit distance.

    The end of the range comes from a forward pass, the start from the
    same pass over both sequences reversed. Returns None when either pass
    is ambiguous or the two passes disagree.

    Raises:
        ValueError: If needle or haystack is empty
    """
    needle = list(needle)
    haystack = list(haystack)

    end = _best_end(needle, haystack)
    if end is None:
        return None
    reversed_end = _best_end(needle[::-1], haystack[::-1])
    if reversed_end is None:
        return None

    start = len(haystack) - reversed_end
    if start > end:
        return None
    return Span(start, end - start)
