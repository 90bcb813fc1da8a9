"""Tests for table_geometry and table_types modules."""

import pytest

from table_errors import BadWrap
from table_geometry import (
    cell_height,
    cell_lines,
    cell_width,
    read_cell_contents,
    table_height,
    table_width,
    wrap_text,
)
from table_types import Cell, ColumnSpec, Config


class TestSizes:
    """Table and cell sizes, borders included where they belong."""

    def test_table_width(self) -> None:
        """Each column adds its width plus one border, plus the left border."""
        assert table_width([ColumnSpec(3)]) == 5
        assert table_width([ColumnSpec(3), ColumnSpec(10)]) == 16

    def test_table_height(self) -> None:
        """Each row adds its height plus one separator, plus the top separator."""
        assert table_height([]) == 1
        assert table_height([1, 3]) == 7

    def test_cell_width_with_span(self) -> None:
        """A column span reclaims the borders between its columns."""
        columns = [ColumnSpec(3), ColumnSpec(4), ColumnSpec(5)]
        assert cell_width(1, Cell(), columns) == 4
        assert cell_width(0, Cell(col_span=2), columns) == 3 + 5 + 6

    def test_cell_height_with_span(self) -> None:
        """A row span reclaims the separators between its rows."""
        assert cell_height(0, Cell(row_span=1), [2, 1]) == 4
        assert cell_height(1, Cell(), [2, 1]) == 1


class TestWrapText:
    def test_wraps_at_limit(self) -> None:
        """Lines break at spaces to stay within the limit."""
        assert wrap_text("ipsum dolor sit amet", 8) == ["ipsum", "dolor", "sit amet"]

    def test_keeps_blank_lines(self) -> None:
        """Paragraph breaks survive wrapping."""
        assert wrap_text("one\n\ntwo", 8) == ["one", "", "two"]

    def test_empty_text(self) -> None:
        """Empty text is one empty line."""
        assert wrap_text("", 8) == [""]

    def test_long_word_left_whole(self) -> None:
        """A word longer than the limit gets a line to itself."""
        assert wrap_text("a loremipsum", 8) == ["a", "loremipsum"]

    def test_cell_lines_rejects_long_word(self) -> None:
        """A line that won't fit the cell is BadWrap."""
        with pytest.raises(BadWrap, match="Limit: 8 characters"):
            cell_lines(0, 0, Cell("loremipsum"), [ColumnSpec(10)])


class TestReadCellContents:
    def test_collapses_whitespace(self) -> None:
        """Runs of whitespace become single spaces."""
        assert read_cell_contents(["|  a   b |", "| c      |"], 1, 9) == "a b c"

    def test_paragraphs(self) -> None:
        """A blank line separates paragraphs."""
        lines = ["| one |", "|     |", "| two |"]
        assert read_cell_contents(lines, 1, 6) == "one\n\ntwo"

    def test_blank_cell(self) -> None:
        """A cell with only spaces reads as empty text."""
        assert read_cell_contents(["|     |", "|     |"], 1, 6) == ""


class TestTypes:
    def test_cell_str(self) -> None:
        """The string form shows spans before the text."""
        assert str(Cell("A")) == "[A]"
        assert str(Cell("A", col_span=1)) == "colspan=1[A]"
        assert str(Cell("A", row_span=2)) == "rowspan=2[A]"

    def test_config_from_widths(self) -> None:
        """A Config can be built from plain widths."""
        config = Config.from_widths([3, 5], num_header_rows=1)
        assert config.columns == [ColumnSpec(3), ColumnSpec(5)]
        assert config.num_columns == 2
        assert config.widths == [3, 5]
        assert config.num_header_rows == 1
