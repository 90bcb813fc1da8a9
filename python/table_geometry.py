"""
Geometry helpers shared by the grid table writer and reader.

All sizes are in characters. A table of columns w1..wn is laid out as

    +--w1--+--w2--+ ... +--wn--+

so every column contributes its width plus the border to its right, and the
table starts with one extra border on the left. Rows work the same way
vertically. A spanning cell reclaims the border between the columns (or
rows) it covers.
"""

from __future__ import annotations

import textwrap
from typing import Sequence

from table_errors import BadWrap
from table_types import Cell, ColumnSpec


def table_width(columns: Sequence[ColumnSpec]) -> int:
    """Total width of a rendered line, borders included."""
    result = 1  # Left border
    for col in columns:
        result += col.width + 1  # Column plus the border on its right
    return result


def table_height(row_heights: Sequence[int]) -> int:
    """Total number of rendered lines, separators included."""
    result = 1  # Top separator
    for height in row_heights:
        result += height + 1  # Row plus the separator below it
    return result


def cell_width(column: int, cell: Cell, columns: Sequence[ColumnSpec]) -> int:
    """Interior width of a cell, including the columns it spans."""
    result = columns[column].width
    for j in range(column + 1, column + cell.col_span + 1):
        result += columns[j].width + 1  # Reclaim the | between the columns
    return result


def cell_height(row: int, cell: Cell, row_heights: Sequence[int]) -> int:
    """Interior height of a cell, including the rows it spans."""
    result = row_heights[row]
    for i in range(row + 1, row + cell.row_span + 1):
        result += row_heights[i] + 1  # Reclaim the separator between the rows
    return result


def wrap_text(text: str, limit: int) -> list[str]:
    """
    Word-wrap text to at most `limit` characters per line.

    Newlines in the text are kept, so a blank line (a paragraph break) stays
    a blank line. Words are never broken; a word longer than `limit` ends up
    on a line of its own and the caller decides what to do with it.
    """
    lines: list[str] = []
    for source_line in text.split("\n"):
        wrapped = textwrap.wrap(source_line, width=limit, break_long_words=False)
        lines.extend(wrapped if wrapped else [""])
    return lines


def cell_lines(row: int | None, column: int, cell: Cell, columns: Sequence[ColumnSpec]) -> list[str]:
    """
    Wrap a cell's text to its interior width, leaving one space of padding
    on both sides.

    Raises:
        BadWrap: If some line cannot be made to fit.
    """
    limit = cell_width(column, cell, columns) - 2
    lines = wrap_text(cell.text, limit)
    for line in lines:
        if len(line) > limit:
            raise BadWrap(row, column, limit, line)
    return lines


def read_cell_contents(lines: Sequence[str], start: int, end: int) -> str:
    """
    Read the text inside the columns [start, end) of every line.

    Whitespace is collapsed to single spaces within a paragraph; a blank line
    inside the selection is kept as a paragraph break.
    """
    selection = "".join(line[start:end].strip() + "\n" for line in lines)
    paragraphs = [" ".join(paragraph.split()) for paragraph in selection.split("\n\n")]
    return "\n\n".join(paragraphs).strip("\n")
