"""Detect headings that link to another document ("chapter links")."""

from __future__ import annotations

import logging
from typing import Callable

from feishu2md.block_index import BlockIndex
from feishu2md.context import RenderContext
from feishu2md.exceptions import Feishu2mdError
from feishu2md.inline import render_inline
from feishu2md.schemas import Block
from feishu2md.url_parser import is_document_url

logger = logging.getLogger(__name__)

ChapterResolver = Callable[[str], str]


def chapter_link_url(text: str) -> str | None:
    """Return the target URL if ``text`` is exactly ``[title](document-url)``.

    Example: ``[Chapter 1](https://xxx.feishu.cn/docx/xxx)``.
    """
    link = text.strip()
    if not (link.startswith("[") and link.endswith(")")):
        return None
    close_bracket = link.find("]")
    open_paren = link.find("(")
    if close_bracket <= 0 or open_paren != close_bracket + 1:
        return None
    title = link[1:close_bracket]
    url = link[open_paren + 1 : -1]
    if not title or not url or not is_document_url(url):
        return None
    return url


def is_chapter_link(text: str) -> bool:
    return chapter_link_url(text) is not None


def resolve_chapter_heading(prefix: str, text: str, resolver: ChapterResolver | None) -> str:
    """Replace a chapter-link heading with the linked document.

    The heading prefix is kept and the resolved document follows it directly,
    so the chapter's own title is demoted one level below the heading. Any
    resolution failure drops the heading.
    """
    url = chapter_link_url(text)
    if url is None:
        return prefix + " " + text
    if resolver is None:
        logger.warning("No chapter resolver configured, dropping heading for %s", url)
        return ""
    try:
        content = resolver(url)
    except Feishu2mdError as exc:
        logger.warning("Failed to load chapter %s: %s", url, exc)
        return ""
    return prefix + content


def find_chapter_links(index: BlockIndex, root: Block, context: RenderContext) -> list[str]:
    """List chapter-link URLs in headings under ``root``, in document order."""
    urls: list[str] = []

    def _walk(block: Block) -> None:
        if block.heading_level is not None:
            url = chapter_link_url(render_inline(block.text_payload.elements, context))
            if url is not None and url not in urls:
                urls.append(url)
        for child in index.children(block):
            _walk(child)

    _walk(root)
    return urls
