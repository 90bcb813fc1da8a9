"""
Resize grid tables in a document by matching their column headings.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from gridtable import read_table, write_table
from table_errors import GridTableError
from table_types import ColumnSpec, Config, Row

__all__ = [
    "GRID_TABLE_RE",
    "ResizeOptions",
    "normalize_heading",
    "match_table",
    "resize_grid_table",
    "resize_tables",
]

logger = logging.getLogger(__name__)

# Top separator, any number of row/separator lines, bottom separator.
GRID_TABLE_RE = re.compile(r"\+[-+]+\n(?:[|+].*\n)*\+[-=+]+")

# Markdown emphasis and code markers ignored when comparing headings.
_MARKDOWN_MARKERS = re.compile(r"[*_`]")


@dataclass(frozen=True)
class ResizeOptions:
    """Which tables to resize (by heading) and the widths to give their columns."""

    match_columns: tuple[str, ...]
    new_widths: tuple[int, ...]
    ignore_errors: bool = False

    def __post_init__(self) -> None:
        if not self.match_columns:
            raise ValueError("At least one column heading to match is required")
        if len(self.match_columns) != len(self.new_widths):
            raise ValueError(
                f"Column headings and widths must have the same number of fields\n"
                f"  Headings: {len(self.match_columns)} ({', '.join(self.match_columns)})\n"
                f"  Widths: {len(self.new_widths)}"
            )

    @classmethod
    def parse(cls, match_columns: str, new_widths: str, ignore_errors: bool = False) -> ResizeOptions:
        """
        Build options from comma-separated headings and widths, e.g.
        ResizeOptions.parse("Name,Description", "12,40").

        Raises:
            ValueError: If either list is missing, the lists differ in length,
                or a width is not a base-10 integer.
        """
        if not match_columns or not new_widths:
            raise ValueError("Both column headings and new widths must be provided")
        widths: list[int] = []
        for field in new_widths.split(","):
            try:
                widths.append(int(field))
            except ValueError:
                raise ValueError(
                    f"Invalid width: '{field}'\n"
                    f"  New widths must be a comma-separated list of base-10 integers"
                ) from None
        return cls(tuple(match_columns.split(",")), tuple(widths), ignore_errors)


def normalize_heading(text: str) -> str:
    """Strip Markdown formatting and case for heading comparison."""
    return _MARKDOWN_MARKERS.sub("", text).strip().casefold()


def match_table(first_row: Row, config: Config, options: ResizeOptions) -> Config | None:
    """
    Check a table's first row against the headings in `options`.

    Returns:
        A copy of `config` with the new widths if every heading matches,
        otherwise None. Tables with spans in the first row never match.
    """
    headings: list[str] = []
    for cell in first_row:
        if cell is None:
            return None
        headings.append(cell.text)
    if len(headings) != len(options.match_columns):
        return None
    for heading, wanted in zip(headings, options.match_columns):
        if normalize_heading(heading) != normalize_heading(wanted):
            return None
    return Config([ColumnSpec(w) for w in options.new_widths], config.num_header_rows)


def resize_grid_table(text: str, options: ResizeOptions) -> str:
    """
    Re-render one grid table with new widths if its headings match.

    Tables that don't match come back unchanged. Tables that can't be read or
    rewritten come back as an error message, or unchanged when
    options.ignore_errors is set.
    """
    try:
        config, rows = read_table(text)
    except GridTableError as err:
        if options.ignore_errors:
            logger.warning("leaving unreadable table as-is: %s", err)
            return text
        return f"Could not read table: {err}"

    if not rows:
        return text
    new_config = match_table(rows[0], config, options)
    if new_config is None:
        logger.debug("table with headings %s does not match", [str(cell) for cell in rows[0]])
        return text

    try:
        grid = write_table(new_config, rows)
    except GridTableError as err:
        if options.ignore_errors:
            logger.warning("leaving table as-is, could not rewrite it: %s", err)
            return text
        return f"Could not write table: {err}"
    logger.info("resized table %s -> %s", config.widths, new_config.widths)
    return grid.rstrip("\n")


def resize_tables(contents: str, options: ResizeOptions) -> str:
    """Resize every matching grid table in a document."""
    return GRID_TABLE_RE.sub(lambda match: resize_grid_table(match.group(0), options), contents)
