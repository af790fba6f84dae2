"""Fix every entry of a bib-file."""

from __future__ import annotations

import time
from pathlib import Path

from rich.console import Console

from . import logging as log
from .extractor import iter_records
from .fixer import rewrite_record
from .models import FixOptions, FixReport


class BibFixError(Exception):
    """Fatal error while fixing a bib-file."""


class InputNotFoundError(BibFixError):
    """Input file cannot be opened for reading."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'Input file "{path}" not found.')


class InputDecodeError(BibFixError):
    """Input file is not valid UTF-8."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'Input file "{path}" is not valid UTF-8.')


class OutputNotCreatableError(BibFixError):
    """Output file cannot be opened for writing."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'Cannot create output file "{path}".')


def fix_content(content: str, options: FixOptions | None = None) -> tuple[str, FixReport]:
    """Fix all entries in bib-file content.

    Only complete entries are written; anything outside them (Mendeley's header
    comment, text between entries, a truncated last entry) is dropped.

    Args:
        content: Raw file content.
        options: Fix switches. Defaults to FixOptions().

    Returns:
        Tuple of (fixed content, report).
    """
    options = options or FixOptions()
    report = FixReport()
    parts: list[str] = []

    start = time.perf_counter()
    for record in iter_records(content):
        result = rewrite_record(record, options)
        log.debug(f"Entry {report.total_records}: @{result.entry_type}, changed={result.changed}")
        parts.append(result.text)
        report.add_result(result)
    report.elapsed = time.perf_counter() - start

    return "".join(parts), report


def fix_file(
    input_path: Path,
    output_path: Path,
    options: FixOptions | None = None,
    console: Console | None = None,
) -> FixReport:
    """Read a bib-file, fix its entries and write the result.

    The output file is only created after all entries were fixed.

    Args:
        input_path: Bib-file exported by Mendeley.
        output_path: Where to write the fixed file (overwritten).
        options: Fix switches.
        console: Console for progress messages (silent if None).

    Returns:
        FixReport for the run.

    Raises:
        InputNotFoundError: Input file cannot be read.
        InputDecodeError: Input file is not UTF-8.
        OutputNotCreatableError: Output file cannot be written.
    """
    try:
        with open(input_path, encoding="utf-8") as f:
            _print(console, f'Successfully opened input file at "{input_path}".')
            content = f.read()
    except UnicodeDecodeError as e:
        raise InputDecodeError(input_path) from e
    except OSError as e:
        raise InputNotFoundError(input_path) from e
    _print(console, "Successfully read and closed input file.")

    fixed, report = fix_content(content, options)
    _print(console, f"Entry fixing took {report.elapsed:f} seconds")

    try:
        f = open(output_path, "w", encoding="utf-8")
    except OSError as e:
        raise OutputNotCreatableError(output_path) from e
    with f:
        _print(console, f'Successfully created output file at "{output_path}".')
        f.write(fixed)
    _print(console, f"Successfully wrote and closed output file with {report.total_records} entries.")

    log.info(f"Removed fields: {report.removed_fields}")
    return report


def _print(console: Console | None, msg: str) -> None:
    if console is not None:
        console.print(msg, highlight=False, markup=False)
