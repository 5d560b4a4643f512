"""Identifier lookup over a flat docx block list."""

from __future__ import annotations

from typing import Iterable, Iterator

from feishu2md.exceptions import MissingBlockError
from feishu2md.schemas import Block, Document


class BlockIndex:
    """Map block ids to blocks for a single document.

    The API returns the tree flattened; parents reference children by id and
    children point back through ``parent_id``. The index is built once, before
    rendering, and never mutated afterwards.
    """

    def __init__(self, blocks: Iterable[Block]) -> None:
        self._blocks: dict[str, Block] = {block.block_id: block for block in blocks}

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def get(self, block_id: str) -> Block:
        """Return the block with ``block_id``.

        Raises:
            MissingBlockError: If the id is not part of the fetched block set.
        """
        try:
            return self._blocks[block_id]
        except KeyError:
            raise MissingBlockError(f"Block {block_id!r} is missing from the document") from None

    def root(self, document: Document) -> Block:
        """Return the page block the document's id refers to."""
        return self.get(document.document_id)

    def parent(self, block: Block) -> Block | None:
        if not block.parent_id:
            return None
        return self.get(block.parent_id)

    def children(self, block: Block) -> Iterator[Block]:
        for child_id in block.children:
            yield self.get(child_id)
