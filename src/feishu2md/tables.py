"""Markdown tables from the flat cell list of a docx table."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def group_cells(cells: Sequence[T], column_size: int, row_size: int = 0) -> list[list[T]]:
    """Split a row-major cell sequence into rows of ``column_size`` cells.

    Cells past ``row_size * column_size`` are dropped when ``row_size`` is
    known. Merged cells are not special-cased: every grid position is its
    own cell.
    """
    if column_size <= 0:
        return []
    if row_size > 0:
        cells = cells[: row_size * column_size]
    return [list(cells[start : start + column_size]) for start in range(0, len(cells), column_size)]


def render_markdown_table(rows: Sequence[Sequence[str]]) -> str:
    """Render rows as a pipe table; the first row is always the header."""
    if not rows:
        return ""
    width = max(len(row) for row in rows)
    normalized = [list(row) + [""] * (width - len(row)) for row in rows]
    header = normalized[0]
    lines = [
        "| " + " | ".join(header) + " |",
        "| " + " | ".join("---" for _ in header) + " |",
    ]
    for row in normalized[1:]:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines) + "\n"
