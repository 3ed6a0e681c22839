"""Render document nodes to the word sequences the locator searches for."""

from collections.abc import Iterable

from ..document import (
    Block,
    BlockQuote,
    CodeBlock,
    Emphasis,
    Heading,
    Image,
    Inline,
    InlineCode,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from .text_tokens import words


def text_words(text: str) -> list[str]:
    return [w.word for w in words(text)]


def inline_words(node: Inline | Iterable[Inline]) -> list[str]:
    """
    Words of the visible text of an inline node (or a run of them).

    Link titles count as visible; images and line breaks contribute nothing.
    """
    if not isinstance(node, Inline):
        return [word for child in node for word in inline_words(child)]

    if isinstance(node, (Text, InlineCode)):
        return text_words(node.content)
    if isinstance(node, (Strong, Emphasis)):
        return inline_words(node.content)
    if isinstance(node, Link):
        result = inline_words(node.content)
        if node.title:
            result.extend(text_words(node.title))
        return result
    if isinstance(node, (Image, LineBreak)):
        return []
    raise TypeError(f"Unsupported inline node: {type(node).__name__}")


def block_words(block: Block) -> list[str]:
    """Words of a block, in document order. Code blocks include their language tag."""
    if isinstance(block, (Heading, Paragraph)):
        return inline_words(block.content)
    if isinstance(block, CodeBlock):
        return text_words(block.language or "") + text_words(block.content)
    if isinstance(block, BlockQuote):
        return [word for child in block.children for word in block_words(child)]
    if isinstance(block, List):
        return [word for item in block.items for child in item.children for word in block_words(child)]
    if isinstance(block, Table):
        rows = ([block.header] if block.header is not None else []) + block.rows
        return [word for row in rows for cell in row.cells for word in inline_words(cell.content)]
    if isinstance(block, ThematicBreak):
        return []
    raise TypeError(f"Unsupported block node: {type(block).__name__}")
