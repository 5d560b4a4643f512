"""Builders for docx API payloads used across the test suite."""

from __future__ import annotations

from typing import Any

from feishu2md.schemas import Block, BlockType, Document

_TEXT_FIELDS = {
    BlockType.PAGE: "page",
    BlockType.TEXT: "text",
    BlockType.BULLET: "bullet",
    BlockType.ORDERED: "ordered",
    BlockType.CODE: "code",
    BlockType.QUOTE: "quote",
    BlockType.EQUATION: "equation",
    BlockType.TODO: "todo",
}


def run(content: str, **style: Any) -> dict[str, Any]:
    return {"text_run": {"content": content, "text_element_style": style}}


def link_run(content: str, url: str) -> dict[str, Any]:
    return run(content, link={"url": url})


def text_block(
    block_id: str,
    block_type: int,
    *elements: dict[str, Any],
    parent: str = "",
    children: list[str] | None = None,
    **style: Any,
) -> Block:
    """Build a text-bearing block; plain strings become unstyled runs."""
    if block_type in _TEXT_FIELDS:
        field = _TEXT_FIELDS[block_type]
    else:
        field = f"heading{block_type - BlockType.HEADING1 + 1}"
    return Block.model_validate(
        {
            "block_id": block_id,
            "parent_id": parent,
            "children": children or [],
            "block_type": block_type,
            field: {"elements": list(elements), "style": style},
        }
    )


def plain(block_id: str, block_type: int, content: str, **kwargs: Any) -> Block:
    return text_block(block_id, block_type, run(content), **kwargs)


def block(block_id: str, block_type: int, *, parent: str = "", children: list[str] | None = None, **payload: Any) -> Block:
    return Block.model_validate(
        {
            "block_id": block_id,
            "parent_id": parent,
            "children": children or [],
            "block_type": block_type,
            **payload,
        }
    )


def page(document_id: str, title: str, children: list[str]) -> Block:
    return plain(document_id, BlockType.PAGE, title, children=children)


def document(document_id: str, title: str = "") -> Document:
    return Document(document_id=document_id, title=title)
