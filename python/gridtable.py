"""
Pandoc grid tables: write them from cells, read them back into cells.

This module gathers the public API of the engine and adds helpers for callers
that hold a whole table at once.
"""

from __future__ import annotations

from typing import Iterable

from grid_reader import Reader, decode_row, parse_separator
from grid_writer import Writer
from table_errors import (
    BadWrap,
    ColumnIndexOutOfRange,
    GridTableError,
    InvalidColumnSpec,
    MalformedTable,
    NegativeSpan,
    OverlappingSpans,
    ReaderNotDone,
    ShadowedCell,
    SpanBeyondHeader,
)
from table_geometry import cell_height, cell_width, read_cell_contents, table_height, table_width, wrap_text
from table_types import MIN_COLUMN_WIDTH, Cell, ColumnSpec, Config, Row

__all__ = [
    "MIN_COLUMN_WIDTH",
    "BadWrap",
    "Cell",
    "ColumnIndexOutOfRange",
    "ColumnSpec",
    "Config",
    "GridTableError",
    "InvalidColumnSpec",
    "MalformedTable",
    "NegativeSpan",
    "OverlappingSpans",
    "Reader",
    "ReaderNotDone",
    "Row",
    "ShadowedCell",
    "SpanBeyondHeader",
    "Writer",
    "cell_height",
    "cell_width",
    "decode_row",
    "parse_separator",
    "read_cell_contents",
    "read_table",
    "table_height",
    "table_width",
    "wrap_text",
    "write_table",
]


def read_table(text: str | Iterable[str]) -> tuple[Config, list[Row]]:
    """
    Read a whole grid table.

    Returns:
        Tuple of (config, rows). None entries in a row are slots covered by a
        column span.

    Raises:
        MalformedTable: If the text is not a well-formed grid table.
    """
    reader = Reader(text)
    rows = list(reader.read())
    return reader.get_config(), rows


def write_table(config: Config, rows: Iterable[Iterable[Cell | None]]) -> str:
    """
    Write a whole grid table. None entries (shadowed slots) are skipped.

    Raises:
        GridTableError: If the config is invalid, the cells don't fit the
            layout, or some text can't be wrapped.
    """
    writer = Writer(config)
    for row in rows:
        for index, cell in enumerate(row):
            if cell is None:
                continue
            writer.write_column(index, cell)
        writer.next_row()
    return writer.render()
