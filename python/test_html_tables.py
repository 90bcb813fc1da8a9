"""Tests for html_tables module."""

import logging

import pytest

from html_tables import CellRecord, convert_tables, html_table_to_grid, parse_html_table
from table_errors import MalformedTable


class TestParseHtmlTable:
    """HTML tables are flattened into cell records on a grid."""

    def test_plain_table(self) -> None:
        """Cells are placed by row and column in document order."""
        table = parse_html_table(
            "<table><tr><td>A</td><td>B</td></tr><tr><td>C</td><td>D</td></tr></table>"
        )
        assert table.num_rows == 2
        assert table.num_columns == 2
        assert table.num_header_rows == 0
        assert table.records == [
            CellRecord(0, 0, "A"),
            CellRecord(0, 1, "B"),
            CellRecord(1, 0, "C"),
            CellRecord(1, 1, "D"),
        ]

    def test_th_row_is_header(self) -> None:
        """A row of <th> cells is a header row."""
        table = parse_html_table(
            "<table><tr><th>A</th><th>B</th></tr><tr><td>C</td><td>D</td></tr></table>"
        )
        assert table.num_header_rows == 1

    def test_thead_rows_are_header(self) -> None:
        """Every row in <thead> is a header row."""
        table = parse_html_table(
            "<table><thead><tr><td>A</td></tr><tr><td>B</td></tr></thead>"
            "<tbody><tr><td>C</td></tr></tbody></table>"
        )
        assert table.num_header_rows == 2

    def test_header_must_lead(self) -> None:
        """A <th> row after a body row doesn't start a header."""
        table = parse_html_table(
            "<table><tr><td>A</td></tr><tr><th>B</th></tr></table>"
        )
        assert table.num_header_rows == 0

    def test_spans_count_extra_slots(self) -> None:
        """colspan="2" becomes col_span=1."""
        table = parse_html_table(
            '<table><tr><td colspan="2">A</td></tr><tr><td>C</td><td>D</td></tr></table>'
        )
        assert table.records[0] == CellRecord(0, 0, "A", col_span=1)

    def test_rowspan_pushes_later_cells_right(self) -> None:
        """Cells skip columns covered by a rowspan from above."""
        table = parse_html_table(
            '<table><tr><td rowspan="2">A</td><td>B</td></tr>'
            "<tr><td>D</td></tr></table>"
        )
        assert table.records == [
            CellRecord(0, 0, "A", row_span=1),
            CellRecord(0, 1, "B"),
            CellRecord(1, 1, "D"),
        ]

    def test_bad_span_attribute(self) -> None:
        """A span that isn't a number counts as 1."""
        table = parse_html_table('<table><tr><td colspan="x">A</td></tr></table>')
        assert table.records == [CellRecord(0, 0, "A")]

    def test_paragraphs(self) -> None:
        """Each <p> becomes a paragraph."""
        table = parse_html_table(
            "<table><tr><td><p>one\n  line</p><p>two</p></td></tr></table>"
        )
        assert table.records[0].text == "one line\n\ntwo"

    def test_inline_markup_flattened(self) -> None:
        """Inline tags are dropped and whitespace collapsed."""
        table = parse_html_table("<table><tr><td>an <em>important</em>\nword</td></tr></table>")
        assert table.records[0].text == "an important word"

    def test_no_table(self) -> None:
        """Text without a <table> is rejected."""
        with pytest.raises(MalformedTable, match="no <table> element"):
            parse_html_table("<p>hello</p>")


class TestHtmlTableToGrid:
    def test_header_table(self) -> None:
        """A <th> row is drawn above a '=' separator."""
        grid = html_table_to_grid(
            "<table><tr><th>A</th><th>B</th></tr><tr><td>C</td><td>D</td></tr></table>",
            widths=[3, 3],
        )
        assert grid == "+---+---+\n| A | B |\n+===+===+\n| C | D |\n+---+---+\n"

    def test_colspan(self) -> None:
        """colspan erases the inner border."""
        grid = html_table_to_grid(
            '<table><tr><td colspan="2">A</td></tr><tr><td>C</td><td>D</td></tr></table>',
            widths=[3, 3],
        )
        assert grid == "+---+---+\n| A     |\n+---+---+\n| C | D |\n+---+---+\n"

    def test_rowspan(self) -> None:
        """rowspan blanks the separator under the cell."""
        grid = html_table_to_grid(
            '<table><tr><td rowspan="2">A</td><td>B</td></tr><tr><td>D</td></tr></table>',
            widths=[3, 3],
        )
        assert grid == "+---+---+\n| A | B |\n+   +---+\n|   | D |\n+---+---+\n"

    def test_default_widths(self) -> None:
        """Columns without a width get the default."""
        grid = html_table_to_grid("<table><tr><td>A</td><td>B</td></tr></table>", widths=[5])
        assert grid.splitlines()[0] == "+-----+" + "-" * 20 + "+"

    def test_extra_widths_ignored(self) -> None:
        """Widths beyond the last column are ignored."""
        grid = html_table_to_grid("<table><tr><td>A</td></tr></table>", widths=[3, 7, 9])
        assert grid == "+---+\n| A |\n+---+\n"


class TestConvertTables:
    """HTML tables inside a document are replaced in place."""

    def test_replaces_each_table(self) -> None:
        """Every table block is replaced and the text around it is kept."""
        doc = (
            "Intro\n\n"
            "<table><tr><td>A</td></tr></table>\n\n"
            "Middle\n\n"
            "<TABLE class='x'><tr><td>B</td></tr></TABLE>\n\n"
            "End\n"
        )
        got = convert_tables(doc, widths=[3])
        assert got == (
            "Intro\n\n"
            "+---+\n| A |\n+---+\n\n"
            "Middle\n\n"
            "+---+\n| B |\n+---+\n\n"
            "End\n"
        )

    def test_error_replaces_table(self) -> None:
        """A table that can't be converted becomes an error message."""
        doc = "<table><tr><td>toolong</td></tr></table>\n"
        got = convert_tables(doc, widths=[3])
        assert got.startswith("Could not convert table: Text could not be wrapped")

    def test_ignore_errors_keeps_table(self, caplog: pytest.LogCaptureFixture) -> None:
        """With ignore_errors the table is kept and a warning logged."""
        doc = "<table><tr><td>toolong</td></tr></table>\n"
        with caplog.at_level(logging.WARNING, logger="html_tables"):
            got = convert_tables(doc, widths=[3], ignore_errors=True)
        assert got == doc
        assert "leaving HTML table" in caplog.text

    def test_no_tables(self) -> None:
        """A document without tables is unchanged."""
        assert convert_tables("just text\n") == "just text\n"
