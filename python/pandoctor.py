"""CLI entry point for pandoctor. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, NoReturn

import click
from rich.console import Console
from rich.text import Text

from html_tables import convert_tables
from resize_tables import ResizeOptions, resize_tables
from table_preview import colorize_table, preview_tables

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(Text(f"Error: {message}", style="bold red"), soft_wrap=True)
    sys.exit(1)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        _fail(f"could not read {path}: {err}")


def _rewrite(path: Path, transform: Callable[[str], str]) -> bool:
    """Apply `transform` to a file in place. Returns whether anything changed."""
    contents = _read(path)
    new_contents = transform(contents)
    logger.info("%s: %d -> %d characters", path, len(contents), len(new_contents))
    if new_contents == contents:
        return False
    try:
        path.write_text(new_contents, encoding="utf-8")
    except OSError as err:
        _fail(f"could not write {path}: {err}")
    return True


def _parse_widths(ctx: click.Context, param: click.Parameter, value: str | None) -> tuple[int, ...] | None:
    if not value:
        return None
    try:
        return tuple(int(field) for field in value.split(","))
    except ValueError:
        raise click.BadParameter("must be a comma-separated list of base-10 integers") from None


def _report(path: Path, changed: bool) -> None:
    if changed:
        err_console.print(Text(f"Updated {path}", style="green"), soft_wrap=True)
    else:
        err_console.print(Text(f"No changes to {path}", style="dim"), soft_wrap=True)


@click.group()
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Fix up tables in Pandoc Markdown documents."""
    match verbose:
        case 0:
            level = logging.WARNING
        case 1:
            level = logging.INFO
        case _:
            level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@main.command("convert-tables")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--widths", callback=_parse_widths, help="Column widths, comma-separated (default 20 each)")
@click.option("--ignore-errors", is_flag=True, help="Leave a table as-is if it can't be converted")
def convert_tables_command(file: Path, widths: tuple[int, ...] | None, ignore_errors: bool) -> None:
    """Rewrite the HTML tables in FILE as grid tables."""
    changed = _rewrite(file, lambda contents: convert_tables(contents, widths, ignore_errors))
    _report(file, changed)


@main.command("resize-tables")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--match-columns", required=True, help="Column headings to match, comma-separated")
@click.option("--new-widths", required=True, help="New widths for the matched columns, comma-separated")
@click.option("--ignore-errors", is_flag=True, help="Leave a table as-is if it can't be resized")
def resize_tables_command(file: Path, match_columns: str, new_widths: str, ignore_errors: bool) -> None:
    """Resize the grid tables in FILE whose headings match --match-columns."""
    try:
        options = ResizeOptions.parse(match_columns, new_widths, ignore_errors)
    except ValueError as err:
        raise click.UsageError(str(err)) from None
    changed = _rewrite(file, lambda contents: resize_tables(contents, options))
    _report(file, changed)


@main.command("show-tables")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show_tables_command(file: Path) -> None:
    """Print the grid tables in FILE with their recovered layout."""
    previews = preview_tables(_read(file))
    if not previews:
        console.print(Text(f"No grid tables in {file}", style="dim"), soft_wrap=True)
        return
    for preview in previews:
        style = "bold red" if preview.error is not None else "bold"
        console.print(Text(preview.summary(), style=style), soft_wrap=True)
        click.echo(colorize_table(preview.text))
        click.echo()


if __name__ == "__main__":
    main()
