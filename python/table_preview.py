"""
Terminal preview of the grid tables found in a document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_reader import parse_separator
from gridtable import read_table
from resize_tables import GRID_TABLE_RE
from table_errors import GridTableError, MalformedTable
from table_types import Config, Row

__all__ = ["ANSI_RE", "TablePreview", "colorize_table", "strip_ansi", "preview_tables"]

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def colorize_table(
    text: str,
    border: Callable[[str], str] = chalk.blue,
    header: Callable[[str], str] = chalk.yellow,
) -> str:
    """
    Colour the borders of a grid table, leaving the cell text alone.

    Separator lines are coloured whole ('=' header separators in the header
    colour); on row lines only the '|' at column boundaries is coloured.
    Text that doesn't start with a separator is returned unchanged.
    """
    lines = text.split("\n")
    try:
        columns, _ = parse_separator(lines[0])
    except MalformedTable:
        return text

    boundaries = {0}
    x = 0
    for col in columns:
        x += col.width + 1
        boundaries.add(x)

    out: list[str] = []
    for line in lines:
        if line.startswith("+"):
            colorize = header if "=" in line else border
            out.append("".join(ch if ch == " " else colorize(ch) for ch in line))
        elif line.startswith("|"):
            out.append("".join(
                border(ch) if ch == "|" and i in boundaries else ch for i, ch in enumerate(line)
            ))
        else:
            out.append(line)
    return "\n".join(out)


@dataclass
class TablePreview:
    """A grid table found in a document, as far as it could be read."""

    index: int
    text: str
    config: Config | None = None
    rows: list[Row] = field(default_factory=list)
    error: GridTableError | None = None

    def summary(self) -> str:
        if self.error is not None or self.config is None:
            return f"table {self.index}: unreadable ({self.error})"
        spans = sum(1 for row in self.rows for cell in row if cell is None)
        return (
            f"table {self.index}: {len(self.rows)} rows, "
            f"{self.config.num_header_rows} header rows, "
            f"widths {self.config.widths}, {spans} spanned slots"
        )


def preview_tables(contents: str) -> list[TablePreview]:
    """Read every grid table in a document."""
    previews: list[TablePreview] = []
    for index, match in enumerate(GRID_TABLE_RE.finditer(contents), start=1):
        text = match.group(0)
        try:
            config, rows = read_table(text)
        except GridTableError as err:
            previews.append(TablePreview(index, text, error=err))
            continue
        previews.append(TablePreview(index, text, config, rows))
    return previews
