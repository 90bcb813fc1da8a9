"""
Grid table writer.

Cells are written into the "current row" by column index, rows are closed
with next_row(), and render() lays the whole table out at once. Row heights
depend on every span in the table, so nothing can be emitted before the last
cell is known.
"""

from __future__ import annotations

import logging

from table_errors import (
    ColumnIndexOutOfRange,
    InvalidColumnSpec,
    NegativeSpan,
    OverlappingSpans,
    ShadowedCell,
    SpanBeyondHeader,
)
from table_geometry import cell_height, cell_lines, cell_width, table_height, table_width
from table_types import MIN_COLUMN_WIDTH, Cell, Config

__all__ = ["Writer"]

logger = logging.getLogger(__name__)


class Writer:
    """
    Incremental builder for a grid table.

    Usage:
        w = Writer(Config.from_widths([10, 10], num_header_rows=1))
        w.write_column(0, Cell("Name"))
        w.write_column(1, Cell("Value"))
        w.next_row()
        w.write_column(0, Cell("spans both", col_span=1))
        print(w.render())

    A failed write_column() leaves the writer in an unspecified state; start
    over with a new Writer.
    """

    def __init__(self, config: Config) -> None:
        if not config.columns:
            raise InvalidColumnSpec()
        for j, spec in enumerate(config.columns):
            if spec.width < MIN_COLUMN_WIDTH:
                raise InvalidColumnSpec(j, spec.width, MIN_COLUMN_WIDTH)

        self.config = config
        self.current_row = -1
        # cells[i][j] is the j'th column of the i'th row
        self._cells: list[list[Cell]] = []
        # Slots assigned by write_column()
        self._written: list[list[bool]] = []
        # Slots covered by a span written earlier. May run ahead of _cells
        # when a row span reaches into rows that have not been started yet.
        self._shadowed: list[list[bool]] = []
        self.next_row()

    @property
    def num_columns(self) -> int:
        return len(self.config.columns)

    def write_column(self, index: int, cell: Cell) -> None:
        """
        Write a cell into column `index` of the current row.

        Raises:
            ColumnIndexOutOfRange: index outside the table, or the column span leaves it
            NegativeSpan: negative row_span or col_span
            SpanBeyondHeader: a row span starting in the header ends in the body
            ShadowedCell: the slot is covered by an earlier span or was already
                written, or the new span would cover a cell that was already written
            OverlappingSpans: the new span covers a slot another span already covers
        """
        row = self.current_row
        num_columns = self.num_columns

        if index < 0 or index >= num_columns:
            raise ColumnIndexOutOfRange(row, index, num_columns)
        if cell.col_span < 0:
            raise NegativeSpan(row, index, "col")
        if cell.row_span < 0:
            raise NegativeSpan(row, index, "row")
        if index + cell.col_span >= num_columns:
            raise ColumnIndexOutOfRange(row, index, num_columns, cell.col_span)

        header = self.config.num_header_rows
        if header != 0 and row < header and row + cell.row_span >= header:
            raise SpanBeyondHeader(row, index, cell.row_span, header)

        if self._shadowed[row][index]:
            raise ShadowedCell(row, index)
        if self._written[row][index]:
            raise ShadowedCell(row, index)
        for j in range(index + 1, index + cell.col_span + 1):
            if self._written[row][j]:
                raise ShadowedCell(row, index, row, j)
        for i in range(row, row + cell.row_span + 1):
            if i >= len(self._shadowed):
                break
            for j in range(index, index + cell.col_span + 1):
                if self._shadowed[i][j]:
                    raise OverlappingSpans(i, j)

        self._cells[row][index] = cell
        self._written[row][index] = True
        for i in range(row, row + cell.row_span + 1):
            if i >= len(self._shadowed):
                self._shadowed.append([False] * num_columns)
            for j in range(index, index + cell.col_span + 1):
                if i == row and j == index:
                    continue  # A cell doesn't shadow itself
                self._shadowed[i][j] = True

    def next_row(self) -> None:
        """Finish the current row and move on to the next one."""
        self.current_row += 1
        self._append_row()

    def _append_row(self) -> None:
        # _shadowed may already hold this row if an earlier span reached it.
        if len(self._shadowed) == len(self._cells):
            self._shadowed.append([False] * self.num_columns)
        self._cells.append([Cell() for _ in range(self.num_columns)])
        self._written.append([False] * self.num_columns)

    def _layout(self) -> tuple[list[list[Cell]], list[list[bool]]]:
        """
        The rows to render, as copies of the cell and shadow grids.

        The empty row left behind by a final next_row() is dropped, and blank
        rows are added until every row span ends inside the table. The writer
        itself is left as it is, so render() can be called more than once.
        """
        cells = [list(row) for row in self._cells]
        shadowed = [list(row) for row in self._shadowed]

        last = len(cells) - 1
        if last > 0 and not any(self._written[last]) and not any(shadowed[last]):
            cells.pop()
            if len(shadowed) > len(cells):
                shadowed.pop()

        while len(cells) < len(shadowed):
            cells.append([Cell() for _ in range(self.num_columns)])
        return cells, shadowed

    def _row_heights(
        self,
        cells: list[list[Cell]],
        shadowed: list[list[bool]],
        wrapped: list[list[list[str]]],
    ) -> list[int]:
        # First pass: each row is as tall as its tallest cell that stays in the row.
        row_heights: list[int] = []
        for i, row in enumerate(cells):
            height = 1
            for j, cell in enumerate(row):
                if shadowed[i][j] or cell.row_span > 0:
                    continue
                height = max(height, len(wrapped[i][j]))
            row_heights.append(height)
        logger.debug("row heights before spans: %s", row_heights)

        # Second pass: grow the rows under each row span, evenly, until its text fits.
        for i, row in enumerate(cells):
            for j, cell in enumerate(row):
                if shadowed[i][j] or cell.row_span == 0:
                    continue
                deficit = len(wrapped[i][j]) - cell_height(i, cell, row_heights)
                if deficit <= 0:
                    continue
                spanned = cell.row_span + 1
                share, extra = divmod(deficit, spanned)
                for k in range(spanned):
                    row_heights[i + k] += share + (1 if k < extra else 0)
                logger.debug(
                    "row span at (%d, %d) grew rows %d..%d by %d lines",
                    i, j, i, i + cell.row_span, deficit,
                )
        return row_heights

    def render(self) -> str:
        """
        Lay out the table as text, one newline-terminated line per row of characters.

        Raises:
            BadWrap: If some cell's text does not fit its column.
        """
        cells, shadowed = self._layout()
        columns = self.config.columns

        # Wrap every visible cell up front; this is where BadWrap surfaces.
        wrapped: list[list[list[str]]] = []
        for i, row in enumerate(cells):
            wrapped.append([
                [""] if shadowed[i][j] else cell_lines(i, j, cell, columns)
                for j, cell in enumerate(row)
            ])

        row_heights = self._row_heights(cells, shadowed, wrapped)
        width = table_width(columns)
        height = table_height(row_heights)
        logger.info(
            "render: %d rows x %d columns -> %d x %d characters",
            len(row_heights), len(columns), width, height,
        )

        # x of every vertical border, y of every separator
        xs = [0]
        for col in columns:
            xs.append(xs[-1] + col.width + 1)
        ys = [0]
        for row_height in row_heights:
            ys.append(ys[-1] + row_height + 1)

        buffer: list[list[str]] = [[" " for _ in range(width)] for _ in range(height)]

        # Separators, with '=' directly below the last header row
        header = self.config.num_header_rows
        for r, y in enumerate(ys):
            sep = "=" if header != 0 and r == header else "-"
            for x in range(width):
                buffer[y][x] = sep
            for x in xs:
                buffer[y][x] = "+"

        # Vertical borders
        for i in range(len(row_heights)):
            for y in range(ys[i] + 1, ys[i + 1]):
                for x in xs:
                    buffer[y][x] = "|"

        # Cell contents. Blanking a spanning cell's box erases the borders inside it.
        for i, row in enumerate(cells):
            for j, cell in enumerate(row):
                if shadowed[i][j]:
                    continue
                x0 = xs[j] + 1
                y0 = ys[i] + 1
                w = cell_width(j, cell, columns)
                h = cell_height(i, cell, row_heights)
                for y in range(y0, y0 + h):
                    for x in range(x0, x0 + w):
                        buffer[y][x] = " "
                for dy, line in enumerate(wrapped[i][j]):
                    for dx, ch in enumerate(line):
                        # One space of padding after the left border
                        buffer[y0 + dy][x0 + 1 + dx] = ch

        return "".join("".join(line) + "\n" for line in buffer)
