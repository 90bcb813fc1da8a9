"""
Shared type definitions for the grid table engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# A column with room for one character in it and padding on both sides.
MIN_COLUMN_WIDTH = 3


@dataclass(frozen=True)
class ColumnSpec:
    """Width of a column in characters, not counting the separators."""

    width: int


@dataclass
class Cell:
    """The contents of one cell of a table."""

    text: str = ""
    row_span: int = 0  # Additional rows covered. 0 = no span.
    col_span: int = 0  # Additional columns covered. 0 = no span.

    def __str__(self) -> str:
        span = ""
        if self.col_span > 0:
            span += f"colspan={self.col_span}"
        if self.row_span > 0:
            span += f"rowspan={self.row_span}"
        return f"{span}[{self.text}]"


# A decoded row: None marks a slot shadowed by a column span to its left.
Row = list[Cell | None]


@dataclass
class Config:
    """Layout of a table: its columns and how many leading rows form the header."""

    columns: list[ColumnSpec] = field(default_factory=list)
    num_header_rows: int = 0  # 0 = no header

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    @property
    def widths(self) -> list[int]:
        return [col.width for col in self.columns]

    @classmethod
    def from_widths(cls, widths: list[int], num_header_rows: int = 0) -> Config:
        return cls([ColumnSpec(w) for w in widths], num_header_rows)
