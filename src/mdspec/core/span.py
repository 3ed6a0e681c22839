"""
Half-open text ranges shared by the grammar and fuzzy-matching code.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """
    A half-open range ``[start, start + length)`` over one text buffer.

    Attributes:
        start: Offset of the first character
        length: Number of characters covered
    """

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def shift(self, offset: int) -> "Span":
        """Return the same range moved ``offset`` characters to the right."""
        return Span(self.start + offset, self.length)

    def slice(self, text: str) -> str:
        return text[self.start : self.end]

    def __repr__(self) -> str:
        return f"Span({self.start}, {self.length})"
