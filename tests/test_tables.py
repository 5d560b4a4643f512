"""Tests for table grouping and rendering."""

from __future__ import annotations

from feishu2md.tables import group_cells, render_markdown_table


class TestGroupCells:
    """Tests for group_cells."""

    def test_groups_row_major(self) -> None:
        assert group_cells(["A", "B", "C", "D"], 2) == [["A", "B"], ["C", "D"]]

    def test_drops_cells_beyond_declared_rows(self) -> None:
        assert group_cells(["A", "B", "C", "D", "E", "F"], 2, row_size=2) == [["A", "B"], ["C", "D"]]

    def test_keeps_partial_row_without_row_size(self) -> None:
        assert group_cells(["A", "B", "C"], 2) == [["A", "B"], ["C"]]

    def test_zero_columns(self) -> None:
        assert group_cells(["A"], 0) == []


class TestRenderMarkdownTable:
    """Tests for render_markdown_table."""

    def test_first_row_is_header(self) -> None:
        assert render_markdown_table([["A", "B"], ["C", "D"]]) == "| A | B |\n| --- | --- |\n| C | D |\n"

    def test_short_rows_are_padded(self) -> None:
        assert render_markdown_table([["A", "B"], ["C"]]) == "| A | B |\n| --- | --- |\n| C |  |\n"

    def test_header_only(self) -> None:
        assert render_markdown_table([["only"]]) == "| only |\n| --- |\n"

    def test_empty(self) -> None:
        assert render_markdown_table([]) == ""
