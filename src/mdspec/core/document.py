"""
Parsed prose document model.

Markdown parsing itself is delegated to an external CommonMark parser;
these nodes are the shape its output is adapted into before the reader
and the locator look at it. Block nodes hold inline nodes in
``content``; container blocks hold blocks in ``children``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class Node:
    """Base class for all document nodes."""


class Inline(Node):
    """Base class for inline (span level) nodes."""


class Block(Node):
    """Base class for block level nodes."""


# Inline nodes


@dataclass
class Text(Inline):
    content: str


@dataclass
class Strong(Inline):
    content: list[Inline] = field(default_factory=list)


@dataclass
class Emphasis(Inline):
    content: list[Inline] = field(default_factory=list)


@dataclass
class InlineCode(Inline):
    content: str


@dataclass
class Link(Inline):
    content: list[Inline] = field(default_factory=list)
    url: str = ""
    title: str | None = None


@dataclass
class Image(Inline):
    alt_text: str = ""
    url: str = ""
    title: str | None = None


@dataclass
class LineBreak(Inline):
    soft: bool = False


# Block nodes


@dataclass
class Heading(Block):
    level: int
    content: list[Inline] = field(default_factory=list)


@dataclass
class Paragraph(Block):
    content: list[Inline] = field(default_factory=list)


@dataclass
class CodeBlock(Block):
    content: str
    language: str | None = None


@dataclass
class BlockQuote(Block):
    children: list[Block] = field(default_factory=list)


@dataclass
class ListItem(Node):
    children: list[Block] = field(default_factory=list)


@dataclass
class List(Block):
    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)


@dataclass
class TableCell(Node):
    content: list[Inline] = field(default_factory=list)


@dataclass
class TableRow(Node):
    cells: list[TableCell] = field(default_factory=list)


@dataclass
class Table(Block):
    header: TableRow | None = None
    rows: list[TableRow] = field(default_factory=list)


@dataclass
class ThematicBreak(Block):
    pass


@dataclass
class SourceDocument:
    """One markdown file: its name, raw text, and parsed top-level blocks."""

    filename: str
    text: str
    blocks: list[Block] = field(default_factory=list)
