"""
Grid table reader.

Parses the text of a grid table back into rows of cells. Column spans are
recovered from where the '|' borders are missing; row spans are not
recovered. The number of header rows is only known once the '=' separator
has been seen, so the layout is available after every row has been read.
"""

from __future__ import annotations

import io
import logging
from typing import Iterable, Iterator

from table_errors import MalformedTable, ReaderNotDone
from table_geometry import read_cell_contents, table_width
from table_types import MIN_COLUMN_WIDTH, Cell, ColumnSpec, Config, Row

__all__ = ["Reader", "parse_separator", "decode_row"]

logger = logging.getLogger(__name__)


def parse_separator(line: str, line_number: int | None = None) -> tuple[list[ColumnSpec], bool]:
    """
    Parse a horizontal separator such as "+---+-----+" or "+===+=====+".

    Every column must be at least MIN_COLUMN_WIDTH characters, and the whole
    line must use a single fill character, '-' or '='.

    Returns:
        Tuple of (columns, is_header), where is_header means the line is
        drawn with '='.

    Raises:
        MalformedTable: If the line is not a separator.
    """
    if not line:
        raise MalformedTable("line of table cannot be empty", line_number)
    if len(line) < 2 or line[0] != "+" or line[-1] != "+":
        raise MalformedTable("separator must start and end with '+'", line_number)

    columns: list[ColumnSpec] = []
    fill: str | None = None
    for index, segment in enumerate(line[1:-1].split("+")):
        if len(segment) < MIN_COLUMN_WIDTH:
            raise MalformedTable(
                f"column {index} too narrow at {len(segment)} characters wide", line_number
            )
        for char in segment:
            if fill is None and char in "-=":
                fill = char
            elif char != fill:
                raise MalformedTable(f"unexpected character {char!r} in separator line", line_number)
        columns.append(ColumnSpec(len(segment)))
    return columns, fill == "="


def decode_row(config: Config, lines: list[str], line_number: int | None = None) -> Row:
    """
    Convert the raw lines between two separators into a row of cells.

    Spans are detected on the first line only: a column boundary without a
    '|' belongs to a cell spanning from the left. Slots covered by such a
    span are None in the result.

    Raises:
        MalformedTable: If the lines don't fit the column layout.
    """
    if not lines:
        raise MalformedTable("each row needs to have at least one line of text", line_number)
    expected = table_width(config.columns)
    for offset, line in enumerate(lines):
        where = None if line_number is None else line_number + offset
        if len(line) != expected:
            raise MalformedTable(
                f"line is {len(line)} characters wide, but the table is {expected}", where
            )
        if line[0] != "|" or line[-1] != "|":
            raise MalformedTable("each line of text needs to begin and end with a '|'", where)

    row: Row = [None] * config.num_columns
    first = lines[0]
    start_column = 0  # First column of the cell being scanned
    left = 0  # x of that cell's left border
    x = 0
    for j, col in enumerate(config.columns):
        x += col.width + 1
        if first[x] == "|":
            # Found the right edge of the current cell.
            text = read_cell_contents(lines, left + 1, x)
            row[start_column] = Cell(text, col_span=j - start_column)
            start_column = j + 1
            left = x
    return row


class Reader:
    """
    Reads one grid table, row by row.

    Usage:
        reader = Reader(text)
        for row in reader.read():
            print([str(cell) for cell in row])
        config = reader.get_config()

    The source is a string or any iterable of lines (an open file works).
    read() is single-pass: once it is exhausted it yields nothing more.
    """

    def __init__(self, source: str | Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(io.StringIO(source) if isinstance(source, str) else source)
        self._line_number = 0
        self._num_rows = 0
        self._done = False

        top = self._next_line()
        if top is None:
            raise MalformedTable("table needs to contain at least one line of text")
        columns, is_header = parse_separator(top, self._line_number)
        if is_header:
            raise MalformedTable("table cannot begin with '=' symbols", self._line_number)
        # The header size is discovered while reading.
        self._config = Config(columns)
        logger.debug("table has %d columns: %s", len(columns), self._config.widths)

    @property
    def done(self) -> bool:
        return self._done

    def _next_line(self) -> str | None:
        line = next(self._lines, None)
        if line is None:
            return None
        self._line_number += 1
        return line.rstrip("\r\n")

    def _scan_to_next_separator(self) -> tuple[list[str], bool, int] | None:
        """
        Collect raw lines up to the next separator.

        Returns:
            Tuple of (content lines, is_header, line number of the first
            content line), or None when the table has ended.
        """
        content: list[str] = []
        start = self._line_number + 1
        while True:
            line = self._next_line()
            if line is None:
                break
            try:
                columns, is_header = parse_separator(line, self._line_number)
            except MalformedTable:
                # Not a separator, so it's row content.
                content.append(line)
                continue

            if len(columns) != self._config.num_columns:
                raise MalformedTable(
                    f"number of columns changed from {self._config.num_columns} to {len(columns)} "
                    f"midway through the table",
                    self._line_number,
                )
            for index, (col, expected) in enumerate(zip(columns, self._config.columns)):
                if col.width != expected.width:
                    raise MalformedTable(
                        f"width of column {index} changed from {expected.width} to {col.width} "
                        f"midway through the table",
                        self._line_number,
                    )
            if is_header and self._config.num_header_rows != 0:
                raise MalformedTable("table has more than one header separator", self._line_number)
            return content, is_header, start

        # Out of lines. Trailing blank lines end the table quietly.
        if any(line.strip() for line in content):
            raise MalformedTable("found content past the end of the table", start)
        return None

    def _read_rows(self) -> Iterator[Row]:
        while True:
            block = self._scan_to_next_separator()
            if block is None:
                self._done = True
                logger.info(
                    "read table: %d rows, %d header rows, widths %s",
                    self._num_rows, self._config.num_header_rows, self._config.widths,
                )
                return
            content, is_header, start = block
            row = decode_row(self._config, content, start)
            self._num_rows += 1
            if is_header:
                self._config.num_header_rows = self._num_rows
            yield row

    def read(self) -> Iterator[Row]:
        """
        Iterate over the rows of the table.

        A table has at most one '=' separator; a second one is rejected
        rather than moving the end of the header.

        Raises:
            MalformedTable: During iteration, at the first row that is not
                well formed, at a second header separator, or at text after
                the last separator.
        """
        if self._done:
            return iter(())
        return self._read_rows()

    def get_config(self) -> Config:
        """
        Return the layout of the table, including the number of header rows.

        Raises:
            ReaderNotDone: If read() has not been drained yet.
        """
        if not self._done:
            raise ReaderNotDone()
        return self._config
