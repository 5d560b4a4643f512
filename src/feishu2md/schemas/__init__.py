"""Shared schemas for feishu2md."""

from feishu2md.schemas.blocks import (
    Block,
    BlockType,
    Document,
    TextBlock,
    TextElement,
    TextStyle,
)
from feishu2md.schemas.document import DocumentURL
from feishu2md.schemas.result import ConversionResult

__all__ = [
    "Block",
    "BlockType",
    "ConversionResult",
    "Document",
    "DocumentURL",
    "TextBlock",
    "TextElement",
    "TextStyle",
]
