"""CLI interface for bibfix."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from . import logging as log
from .constants import DEFAULT_INPUT, DEFAULT_OUTPUT, URL_EXCEPTION_TYPES
from .models import FixOptions, FixReport
from .processor import BibFixError, fix_file

app = typer.Typer(
    name="bibfix",
    help="Fix formatting of bib-files exported by Mendeley Desktop.",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"bibfix version {__version__}")
        raise typer.Exit()


@app.command()
def fix(
    output_file: Annotated[
        Path,
        typer.Argument(
            help="Path to write the fixed .bib file to.",
            dir_okay=False,
        ),
    ] = Path(DEFAULT_OUTPUT),
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to the .bib file exported by Mendeley.",
            dir_okay=False,
        ),
    ] = Path(DEFAULT_INPUT),
    keep_annote: Annotated[
        bool,
        typer.Option(
            "--keep-annote/--drop-annote",
            help="Keep personal annotations (annote field).",
        ),
    ] = False,
    keep_abstract: Annotated[
        bool,
        typer.Option(
            "--keep-abstract/--drop-abstract",
            help="Keep abstracts.",
        ),
    ] = False,
    url_exception: Annotated[
        list[str] | None,
        typer.Option(
            "--url-exception",
            "-u",
            help=f"Entry type that keeps its url (repeatable). Default: {', '.join(sorted(URL_EXCEPTION_TYPES))}.",
        ),
    ] = None,
    keep_all_urls: Annotated[
        bool,
        typer.Option(
            "--keep-all-urls/--no-keep-all-urls",
            help="Treat every entry type as a url exception.",
        ),
    ] = False,
    keep_url_with_doi: Annotated[
        bool,
        typer.Option(
            "--keep-url-with-doi/--drop-url-with-doi",
            help="Keep the url of exception entries even if they have a doi.",
        ),
    ] = False,
    issn_as_year: Annotated[
        bool,
        typer.Option(
            "--issn-as-year/--no-issn-as-year",
            help="Rename the issn field to year for entries without a year (for custom dates like 'to appear').",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            envvar="BIBFIX_DEBUG",
            help="Print debug messages to stderr.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Fix a bib-file generated by Mendeley Desktop.

    Note the argument order: the output file comes first.

    Examples:
      bibfix
      bibfix refs_fixed.bib refs.bib
      bibfix out.bib library.bib --keep-abstract --issn-as-year
    """
    if debug:
        log.set_debug(True)

    options = FixOptions(
        keep_annote=keep_annote,
        keep_abstract=keep_abstract,
        url_exception_types=frozenset(url_exception) if url_exception else URL_EXCEPTION_TYPES,
        every_entry_url_exception=keep_all_urls,
        keep_url_only_if_no_doi=not keep_url_with_doi,
        turn_issn_into_missing_year=issn_as_year,
    )

    try:
        report = fix_file(input_file, output_file, options=options, console=console)
    except BibFixError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)
    except MemoryError:
        console.print("[bold red]Error:[/] Memory could not be allocated to store the file contents.")
        raise typer.Exit(1)

    _print_summary(report)


def _print_summary(report: FixReport) -> None:
    """Print a table of applied fixes."""
    if report.changed_records == 0:
        console.print("\n[dim]No entries needed fixing.[/]")
        return

    table = Table(title="Fixes applied", title_justify="left")
    table.add_column("Fix")
    table.add_column("Count", justify="right")
    table.add_row("Titles unbraced", str(report.titles_fixed))
    table.add_row("Months unbraced", str(report.months_fixed))
    table.add_row("Escaped braces", str(report.braces_unescaped))
    for name, count in sorted(report.removed_fields.items()):
        table.add_row(f"Removed {name}", str(count))
    if report.years_backfilled:
        table.add_row("Years from issn", str(report.years_backfilled))

    console.print()
    console.print(table)
    console.print(f"[green]{report.changed_records} of {report.total_records} entries changed.[/]")


if __name__ == "__main__":
    app()
