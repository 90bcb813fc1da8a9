"""
Errors raised by the grid table writer and reader.

Every error is a ValueError subclass so callers that only care about
"bad table input" can catch one type, while the attributes on each class
carry the row/column/width context the message was built from.
"""

from __future__ import annotations

__all__ = [
    "GridTableError",
    "InvalidColumnSpec",
    "ColumnIndexOutOfRange",
    "NegativeSpan",
    "ShadowedCell",
    "OverlappingSpans",
    "SpanBeyondHeader",
    "BadWrap",
    "MalformedTable",
    "ReaderNotDone",
]


class GridTableError(ValueError):
    """Base class for all grid table errors."""


class InvalidColumnSpec(GridTableError):
    """The table has no columns, or a column is too narrow to hold any text."""

    def __init__(self, column: int | None = None, width: int | None = None, minimum: int | None = None) -> None:
        self.column = column
        self.width = width
        self.minimum = minimum
        if column is None:
            msg = "Invalid column spec: table needs at least 1 column"
        else:
            msg = (
                f"Invalid column spec: column {column} is too narrow\n"
                f"  Width: {width}\n"
                f"  Minimum: {minimum}"
            )
        super().__init__(msg)


class ColumnIndexOutOfRange(GridTableError):
    """A cell was written outside the table, or its column span leaves the table."""

    def __init__(self, row: int, column: int, num_columns: int, col_span: int = 0) -> None:
        self.row = row
        self.column = column
        self.num_columns = num_columns
        self.col_span = col_span
        if 0 <= column < num_columns:
            msg = (
                f"Column index out of range: cell at row {row}, column {column} "
                f"spans {col_span + 1} columns\n"
                f"  The table has only {num_columns} columns"
            )
        else:
            msg = (
                f"Column index out of range: {column}\n"
                f"  Row: {row}\n"
                f"  Valid columns: 0..{num_columns - 1}"
            )
        super().__init__(msg)


class NegativeSpan(GridTableError):
    """A cell was written with a negative row or column span."""

    def __init__(self, row: int, column: int, axis: str) -> None:
        self.row = row
        self.column = column
        self.axis = axis  # "row" or "col"
        super().__init__(f"Negative span: cell at row {row}, column {column} had a negative {axis} span")


class ShadowedCell(GridTableError):
    """A write targeted a slot hidden by a span, or a span would hide a written cell."""

    def __init__(
        self,
        row: int,
        column: int,
        shadowed_row: int | None = None,
        shadowed_column: int | None = None,
    ) -> None:
        self.row = row
        self.column = column
        self.shadowed_row = row if shadowed_row is None else shadowed_row
        self.shadowed_column = column if shadowed_column is None else shadowed_column
        if shadowed_column is None:
            msg = f"Wrote to shadowed cell at row {row}, column {column}"
        else:
            msg = (
                f"Span shadows a previously-written cell\n"
                f"  Spanning cell: row {row}, column {column}\n"
                f"  Written cell: row {self.shadowed_row}, column {self.shadowed_column}"
            )
        super().__init__(msg)


class OverlappingSpans(GridTableError):
    """Two spans cover the same slot."""

    def __init__(self, row: int, column: int) -> None:
        self.row = row
        self.column = column
        super().__init__(f"Overlapping spans: two spans overlapped at row {row}, column {column}")


class SpanBeyondHeader(GridTableError):
    """A row span starts inside the header and ends outside it."""

    def __init__(self, row: int, column: int, row_span: int, num_header_rows: int) -> None:
        self.row = row
        self.column = column
        self.row_span = row_span
        self.num_header_rows = num_header_rows
        super().__init__(
            f"Span extended beyond header: cell at row {row}, column {column} spans {row_span + 1} rows\n"
            f"  The header is only {num_header_rows} rows"
        )


class BadWrap(GridTableError):
    """Cell text could not be wrapped to fit inside its column."""

    def __init__(self, row: int | None, column: int, limit: int, line: str) -> None:
        self.row = row
        self.column = column
        self.limit = limit
        self.line = line
        where = f"row {row}, column {column}" if row is not None else f"column {column}"
        super().__init__(
            f"Text could not be wrapped in {where}\n"
            f"  Limit: {limit} characters\n"
            f"  Offending line ({len(line)} characters): \"{line}\""
        )


class MalformedTable(GridTableError):
    """The text is not a well-formed grid table."""

    def __init__(self, reason: str, line_number: int | None = None) -> None:
        self.reason = reason
        self.line_number = line_number
        if line_number is None:
            msg = f"Malformed grid table: {reason}"
        else:
            msg = f"Malformed grid table: {reason}\n  Line: {line_number}"
        super().__init__(msg)


class ReaderNotDone(GridTableError):
    """The table layout was requested before every row had been read."""

    def __init__(self) -> None:
        super().__init__("Reader not done reading table: drain read() before calling get_config()")
