"""Tests for the block index."""

from __future__ import annotations

import pytest
from factories import document, page, plain

from feishu2md.block_index import BlockIndex
from feishu2md.exceptions import MissingBlockError
from feishu2md.schemas import BlockType


@pytest.fixture
def index() -> BlockIndex:
    return BlockIndex(
        [
            page("doc", "T", ["a", "b"]),
            plain("a", BlockType.TEXT, "a", parent="doc"),
            plain("b", BlockType.TEXT, "b", parent="doc"),
        ]
    )


def test_root_lookup(index: BlockIndex) -> None:
    assert index.root(document("doc")).block_id == "doc"
    assert len(index) == 3
    assert "a" in index


def test_children_in_order(index: BlockIndex) -> None:
    root = index.get("doc")
    assert [child.block_id for child in index.children(root)] == ["a", "b"]


def test_parent(index: BlockIndex) -> None:
    assert index.parent(index.get("a")).block_id == "doc"
    assert index.parent(index.get("doc")) is None


def test_missing_root_is_fatal(index: BlockIndex) -> None:
    with pytest.raises(MissingBlockError, match="other"):
        index.root(document("other"))
