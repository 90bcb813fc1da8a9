"""
Convert HTML tables embedded in a Markdown document into grid tables.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from bs4 import BeautifulSoup, Tag

from grid_writer import Writer
from table_errors import GridTableError, MalformedTable
from table_types import Cell, Config

__all__ = [
    "TABLE_BLOCK_RE",
    "DEFAULT_COLUMN_WIDTH",
    "CellRecord",
    "HtmlTable",
    "parse_html_table",
    "html_table_to_grid",
    "convert_tables",
]

logger = logging.getLogger(__name__)

TABLE_BLOCK_RE = re.compile(r"<table\b[\s\S]*?</table\s*>", flags=re.I)

DEFAULT_COLUMN_WIDTH = 20


@dataclass(frozen=True)
class CellRecord:
    """One cell as the writer wants it: spans count additional rows/columns."""

    row: int
    column: int
    text: str
    row_span: int = 0
    col_span: int = 0


@dataclass
class HtmlTable:
    records: list[CellRecord]
    num_rows: int
    num_columns: int
    num_header_rows: int


def _span(cell: Tag, attr: str) -> int:
    # HTML spans count every row/column covered; ours count the extra ones.
    try:
        value = int(cell.get(attr, 1) or 1)
    except ValueError:
        value = 1
    return max(value, 1) - 1


def _cell_text(cell: Tag) -> str:
    paragraphs = cell.find_all("p")
    if paragraphs:
        parts = [" ".join(p.get_text(" ").split()) for p in paragraphs]
        return "\n\n".join(part for part in parts if part)
    return " ".join(cell.get_text(" ").split())


def parse_html_table(table_html: str) -> HtmlTable:
    """
    Flatten an HTML <table> into cell records.

    Each cell lands in the first column of its row not already covered by a
    rowspan from a row above. Leading rows made only of <th> cells, or rows
    inside <thead>, form the header.

    Raises:
        MalformedTable: If there is no <table> element.
    """
    soup = BeautifulSoup(table_html, "html.parser")
    table = soup.find("table")
    if table is None:
        raise MalformedTable("no <table> element found")

    records: list[CellRecord] = []
    covered_until: dict[int, int] = {}  # column -> last row covered by a rowspan
    num_rows = 0
    num_columns = 0
    num_header_rows = 0
    in_header = True

    for r, tr in enumerate(table.find_all("tr")):
        num_rows = r + 1
        taken = {c for c, last in covered_until.items() if last >= r}
        cells = tr.find_all(["td", "th"], recursive=False)
        column = 0
        for cell in cells:
            while column in taken:
                column += 1
            row_span = _span(cell, "rowspan")
            col_span = _span(cell, "colspan")
            records.append(CellRecord(r, column, _cell_text(cell), row_span, col_span))
            for c in range(column, column + col_span + 1):
                covered_until[c] = r + row_span
            column += col_span + 1
        num_columns = max(num_columns, column, max(taken, default=-1) + 1)

        is_header = bool(cells) and (
            all(cell.name == "th" for cell in cells) or tr.find_parent("thead") is not None
        )
        if in_header and is_header:
            num_header_rows += 1
        else:
            in_header = False

    logger.debug(
        "parsed HTML table: %d rows, %d columns, %d header rows",
        num_rows, num_columns, num_header_rows,
    )
    return HtmlTable(records, num_rows, num_columns, num_header_rows)


def html_table_to_grid(
    table_html: str,
    widths: Sequence[int] | None = None,
    default_width: int = DEFAULT_COLUMN_WIDTH,
) -> str:
    """
    Render an HTML table as a grid table.

    Args:
        table_html: Text of one <table> element
        widths: Optional column widths; missing columns get default_width
        default_width: Width for columns not covered by `widths`

    Returns:
        The grid table, one newline-terminated line per row of characters

    Raises:
        GridTableError: If the table can't be laid out.
    """
    table = parse_html_table(table_html)
    chosen = list(widths or [])[: table.num_columns]
    chosen += [default_width] * (table.num_columns - len(chosen))
    writer = Writer(Config.from_widths(chosen, table.num_header_rows))

    current = 0
    for record in table.records:
        while current < record.row:
            writer.next_row()
            current += 1
        writer.write_column(record.column, Cell(record.text, record.row_span, record.col_span))
    return writer.render()


def convert_tables(
    contents: str,
    widths: Sequence[int] | None = None,
    ignore_errors: bool = False,
) -> str:
    """
    Replace every HTML table in a document with a grid table.

    A table that can't be converted is replaced by an error message, or left
    untouched when ignore_errors is set.
    """

    def replace(match: re.Match[str]) -> str:
        try:
            grid = html_table_to_grid(match.group(0), widths)
        except GridTableError as err:
            if ignore_errors:
                logger.warning("leaving HTML table at offset %d as-is: %s", match.start(), err)
                return match.group(0)
            return f"Could not convert table: {err}"
        return grid.rstrip("\n")

    return TABLE_BLOCK_RE.sub(replace, contents)
