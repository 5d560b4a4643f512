"""Ordinals for ordered-list blocks."""

from __future__ import annotations

from feishu2md.block_index import BlockIndex
from feishu2md.schemas import Block, BlockType


def ordered_list_number(block: Block, index: BlockIndex) -> int:
    """Return the ordinal of an ordered block within its run of siblings.

    Counts the ordered siblings directly before ``block`` in its parent's
    child list; any other block type ends the run, so numbering restarts at 1
    after an interruption.
    """
    parent = index.parent(block)
    if parent is None:
        return 1

    try:
        position = parent.children.index(block.block_id)
    except ValueError:
        return 1

    number = 1
    for sibling_id in reversed(parent.children[:position]):
        if index.get(sibling_id).block_type != BlockType.ORDERED:
            break
        number += 1
    return number
