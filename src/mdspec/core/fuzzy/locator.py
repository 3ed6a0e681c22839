"""
Fuzzy recovery of source spans for parsed elements that carry no offsets.

Each lookup is best-effort: a miss returns None and the caller falls back
to a coarser location.
"""

import logging
import threading
from bisect import bisect_right
from collections.abc import Sequence

from ..span import Span
from . import levenshtein
from .text_tokens import paragraphs, raw_lines, sections, words

logger = logging.getLogger(__name__)


def find_section(text: str, level: int, title: str) -> Span | None:
    """Closest heading of the given level by title; the first wins a tie."""
    best: Span | None = None
    best_distance = 0
    for section in sections(text):
        if section.level != level:
            continue
        d = levenshtein.distance(section.title, title)
        if best is None or d < best_distance:
            best = section.span
            best_distance = d
    return best


def find_paragraph(text: str, target_words: Sequence[str]) -> Span | None:
    """Closest paragraph (or fenced block) by word distance; the first wins a tie."""
    best: Span | None = None
    best_distance = 0
    for paragraph in paragraphs(text):
        d = levenshtein.distance([w.word for w in words(paragraph.text)], target_words)
        if best is None or d < best_distance:
            best = paragraph.span
            best_distance = d
    return best


def find_span(text: str, target_words: Sequence[str]) -> Span | None:
    """
    Closest run of words in text.

    The span starts at the first matched word and stops where the word
    after the match begins, or at the end of the last word.
    """
    source_words = words(text)
    if not target_words or not source_words:
        return None

    match = levenshtein.search(list(target_words), [w.word for w in source_words])
    if match is None or match.length == 0:
        return None

    start = source_words[match.start].span.start
    if match.end == len(source_words):
        end = source_words[-1].span.end
    else:
        end = source_words[match.end].span.start
    return Span(start, end - start)


class LineStartCache:
    """
    Line-start offsets per buffer, built on first use and kept for the
    life of the process. Buffers are identified by (name, text).
    """

    def __init__(self) -> None:
        self._starts: dict[tuple[str, str], tuple[int, ...]] = {}
        self._lock = threading.Lock()

    def get(self, name: str, text: str) -> tuple[int, ...]:
        key = (name, text)
        starts = self._starts.get(key)
        if starts is not None:
            return starts

        computed = tuple(line.span.start for line in raw_lines(text))
        with self._lock:
            return self._starts.setdefault(key, computed)

    def clear(self) -> None:
        with self._lock:
            self._starts.clear()


line_starts = LineStartCache()


def find_line_col(name: str, text: str, offset: int) -> tuple[int, int]:
    """Convert an offset into text to a 1-based (line, column) pair."""
    starts = line_starts.get(name, text)
    if not starts:
        return 1, offset + 1
    index = max(bisect_right(starts, offset) - 1, 0)
    return index + 1, offset - starts[index] + 1
