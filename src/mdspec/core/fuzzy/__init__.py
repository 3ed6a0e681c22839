"""Word, line and section tokenizing plus edit-distance location of document elements."""

from . import levenshtein
from .locator import LineStartCache, find_line_col, find_paragraph, find_section, find_span, line_starts
from .text_tokens import (
    LineOrCodeBlock,
    LineSpan,
    SectionSpan,
    TextSpan,
    WordSpan,
    lines_and_code_fences,
    paragraphs,
    raw_lines,
    sections,
    words,
)
from .words import block_words, inline_words, text_words

__all__ = [
    "LineOrCodeBlock",
    "LineSpan",
    "LineStartCache",
    "SectionSpan",
    "TextSpan",
    "WordSpan",
    "block_words",
    "find_line_col",
    "find_paragraph",
    "find_section",
    "find_span",
    "inline_words",
    "levenshtein",
    "line_starts",
    "lines_and_code_fences",
    "paragraphs",
    "raw_lines",
    "sections",
    "text_words",
    "words",
]
