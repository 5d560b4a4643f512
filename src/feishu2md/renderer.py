"""Render a docx block tree to Markdown."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from feishu2md.block_index import BlockIndex
from feishu2md.chapters import ChapterResolver, resolve_chapter_heading
from feishu2md.code_languages import fence_language
from feishu2md.context import RenderContext
from feishu2md.inline import render_inline
from feishu2md.numbering import ordered_list_number
from feishu2md.schemas import Block, BlockType, Document
from feishu2md.tables import group_cells, render_markdown_table

logger = logging.getLogger(__name__)

INDENT_UNIT = "\t"


@dataclass
class RenderOutput:
    """Markdown for a whole document plus the image tokens it references."""

    markdown: str
    image_tokens: list[str] = field(default_factory=list)


class BlockRenderer:
    """Depth-first renderer over a single document's block index.

    One instance serves one top-level conversion: ``image_tokens`` collects
    every image block seen, in traversal order.
    """

    def __init__(
        self,
        index: BlockIndex,
        context: RenderContext,
        resolver: ChapterResolver | None = None,
    ) -> None:
        self.index = index
        self.context = context
        self.resolver = resolver
        self.image_tokens: list[str] = []

    def render(self, block: Block, indent_level: int = 0) -> str:
        """Render ``block`` and its subtree."""
        prefix = INDENT_UNIT * indent_level
        block_type = block.block_type

        if block_type == BlockType.PAGE:
            body = self._render_page(block)
        elif block.heading_level is not None:
            body = self._render_heading(block)
        elif block_type == BlockType.TEXT:
            body = self._text(block)
        elif block_type in (BlockType.BULLET, BlockType.ORDERED):
            body = self._render_list_item(block, indent_level)
        elif block_type == BlockType.CODE:
            body = self._render_code(block, prefix)
        elif block_type == BlockType.QUOTE:
            body = "> " + self._text(block)
        elif block_type == BlockType.EQUATION:
            body = "$$\n" + self._text(block) + "\n$$\n"
        elif block_type == BlockType.TODO:
            body = ("- [x] " if block.text_payload.style.done else "- [ ] ") + self._text(block)
        elif block_type == BlockType.DIVIDER:
            body = "---\n"
        elif block_type == BlockType.IMAGE:
            body = self._render_image(block)
        elif block_type == BlockType.TABLE:
            body = self._render_table(block)
        elif block_type == BlockType.TABLE_CELL:
            body = "".join(self.render(child, 0) for child in self.index.children(block))
        elif block_type == BlockType.QUOTE_CONTAINER:
            body = "".join("> " + self.render(child, 0) for child in self.index.children(block))
        else:
            logger.debug("Skipping unsupported block type %s (%s)", block_type, block.block_id)
            body = ""

        return prefix + body

    def _text(self, block: Block) -> str:
        return render_inline(block.text_payload.elements, self.context)

    def _render_page(self, block: Block) -> str:
        parts = ["# ", self._text(block)]
        for child in self.index.children(block):
            parts.append(self.render(child, 0))
            parts.append("\n")
        return "".join(parts)

    def _render_heading(self, block: Block) -> str:
        prefix = "#" * block.heading_level
        text = self._text(block)
        if self.context.one_page:
            return resolve_chapter_heading(prefix, text, self.resolver)
        return prefix + " " + text

    def _render_list_item(self, block: Block, indent_level: int) -> str:
        if block.block_type == BlockType.ORDERED:
            marker = f"{ordered_list_number(block, self.index)}. "
        else:
            marker = "- "
        parts = [marker, self._text(block)]
        for child in self.index.children(block):
            parts.append(self.render(child, indent_level + 1))
        return "".join(parts)

    def _render_code(self, block: Block, prefix: str) -> str:
        language = fence_language(block.text_payload.style.language)
        code = self._text(block)[:-1]
        lines = [prefix + line + "\n" for line in code.split("\n")]
        return "\n" + prefix + "```" + language + "\n" + "".join(lines) + prefix + "```\n"

    def _render_image(self, block: Block) -> str:
        token = block.image.token if block.image else ""
        self.image_tokens.append(token)
        return f"![]({token})\n"

    def _render_table(self, block: Block) -> str:
        table = block.table
        if table is None:
            return ""
        cells = [self.render(self.index.get(cell_id), 0).replace("\n", "") for cell_id in table.cells]
        rows = group_cells(cells, table.property.column_size, table.property.row_size)
        return render_markdown_table(rows) + "\n"


def render_document(
    document: Document,
    blocks: Iterable[Block],
    context: RenderContext | None = None,
    *,
    resolver: ChapterResolver | None = None,
    indent_level: int = 0,
) -> RenderOutput:
    """Index ``blocks`` and render the tree rooted at the document's page block.

    Raises:
        MissingBlockError: If the root or a referenced child is not in
            ``blocks``.
    """
    index = BlockIndex(blocks)
    renderer = BlockRenderer(index, context or RenderContext(), resolver)
    markdown = renderer.render(index.root(document), indent_level)
    return RenderOutput(markdown=markdown, image_tokens=renderer.image_tokens)
