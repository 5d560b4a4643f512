"""feishu2md: convert Feishu/Lark documents into Markdown."""

from feishu2md.block_index import BlockIndex
from feishu2md.chapters import chapter_link_url, is_chapter_link
from feishu2md.context import RenderContext
from feishu2md.exceptions import (
    ApiError,
    AuthError,
    ChapterCycleError,
    DocumentNotFoundError,
    Feishu2mdError,
    FetchError,
    InvalidURLError,
    MissingBlockError,
    RateLimitError,
    RenderError,
    UnsupportedDocumentError,
)
from feishu2md.ingestion import ConversionOptions, convert_document
from feishu2md.renderer import BlockRenderer, RenderOutput, render_document
from feishu2md.schemas import Block, BlockType, ConversionResult, Document, DocumentURL
from feishu2md.url_parser import is_document_url, parse_document_url

__all__ = [
    "ApiError",
    "AuthError",
    "Block",
    "BlockIndex",
    "BlockRenderer",
    "BlockType",
    "ChapterCycleError",
    "ConversionOptions",
    "ConversionResult",
    "Document",
    "DocumentNotFoundError",
    "DocumentURL",
    "Feishu2mdError",
    "FetchError",
    "InvalidURLError",
    "MissingBlockError",
    "RateLimitError",
    "RenderContext",
    "RenderError",
    "RenderOutput",
    "UnsupportedDocumentError",
    "chapter_link_url",
    "convert_document",
    "is_chapter_link",
    "is_document_url",
    "parse_document_url",
    "render_document",
]
