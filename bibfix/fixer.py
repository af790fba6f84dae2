"""Rewrite the fields of a single Mendeley bib entry."""

from __future__ import annotations

import re

from . import logging as log
from .constants import (
    ABSTRACT_FIELD,
    ANNOTE_FIELD,
    DOI_FIELD,
    FILE_FIELD,
    ISSN_FIELD,
    MONTH_FIELD,
    TITLE_FIELD,
    URL_FIELD,
    YEAR_FIELD,
)
from .extractor import get_entry_type
from .models import FixOptions, RecordResult
from .utils import FieldLine, end_of_field, end_of_line, find_closing_brace, split_field_line, unescape_braces

# One brace layer around a three-letter month: {{jan}} -> {jan}, {jan} -> jan
MONTH_VALUE_PATTERN = re.compile(r"\{(\{[A-Za-z]{3}\}|[A-Za-z]{3})\}")


def fix_record(record: str, options: FixOptions | None = None) -> str:
    """Apply all fixes to one bib entry and return the corrected text."""
    return rewrite_record(record, options).text


def rewrite_record(record: str, options: FixOptions | None = None) -> RecordResult:
    """Apply all fixes to one bib entry.

    The entry is scanned line by line. Lines that are kept are copied to the
    output (after their fix, if any); removed fields are skipped. Field order is
    the one Mendeley exports (alphabetical), so a doi line is always seen
    before the url line of the same entry.

    Args:
        record: Entry text from '@' through the closing '}' line.
        options: Fix switches. Defaults to FixOptions().

    Returns:
        RecordResult with the corrected text and what changed.
    """
    options = options or FixOptions()
    entry_type = get_entry_type(record)
    result = RecordResult(text=record, entry_type=entry_type)
    url_exception = options.is_url_exception(entry_type)

    kept: list[str] = []
    has_doi = False
    has_year = False
    issn_line: int | None = None  # Index into kept
    issn_indent = 0

    pos = 0
    length = len(record)
    while pos < length:
        line_end = min(end_of_line(record, pos) + 1, length)
        line = record[pos:line_end]

        # The "@type{key," line holds no field
        parsed = split_field_line(line) if pos > 0 else None
        name = parsed.name if parsed else None

        if name in (ANNOTE_FIELD, ABSTRACT_FIELD) and not options.keeps_multiline_field(name):
            pos = _end_of_removed_field(record, pos)
            result.removed_fields.append(name)
            log.debug(f"{_key(record)}: removed {name}")
            continue
        if name == FILE_FIELD:
            pos = line_end
            result.removed_fields.append(name)
            log.debug(f"{_key(record)}: removed file")
            continue
        if name == URL_FIELD and (not url_exception or (options.keep_url_only_if_no_doi and has_doi)):
            pos = line_end
            result.removed_fields.append(name)
            log.debug(f"{_key(record)}: removed url (type={entry_type}, doi={has_doi})")
            continue

        if name == MONTH_FIELD:
            fixed = _fix_month(line, parsed)
            if fixed is not None:
                line = fixed
                result.month_fixed = True
        elif name == TITLE_FIELD:
            fixed = _fix_title(line, parsed)
            if fixed is not None:
                line = fixed
                result.title_fixed = True
            else:
                log.debug(f"{_key(record)}: title has no double braces, left as is")
        elif name == DOI_FIELD:
            has_doi = True
        elif name == YEAR_FIELD:
            has_year = True
        elif name == ISSN_FIELD:
            issn_line = len(kept)
            issn_indent = parsed.indent

        line, count = unescape_braces(line)
        result.braces_unescaped += count
        kept.append(line)
        pos = line_end

    if options.turn_issn_into_missing_year and not has_year and issn_line is not None:
        # The issn value is kept; it is expected to hold a custom date like "to appear"
        line = kept[issn_line]
        kept[issn_line] = line[:issn_indent] + YEAR_FIELD + line[issn_indent + len(ISSN_FIELD) :]
        result.year_backfilled = True
        log.info(f"{_key(record)}: renamed issn to year")

    result.text = "".join(kept)
    return result


def _fix_month(line: str, parsed: FieldLine) -> str | None:
    value = line[parsed.value_start : parsed.value_end]
    match = MONTH_VALUE_PATTERN.fullmatch(value)
    if not match:
        return None
    return line[: parsed.value_start] + match.group(1) + line[parsed.value_end :]


def _fix_title(line: str, parsed: FieldLine) -> str | None:
    value = line[parsed.value_start : parsed.value_end]
    if not (value.startswith("{{") and value.endswith("}}")):
        return None
    # {{A} and {B}} is not double-braced
    if find_closing_brace(value, 1) != len(value) - 2:
        return None
    return line[: parsed.value_start] + value[1:-1] + line[parsed.value_end :]


def _end_of_removed_field(record: str, start: int) -> int:
    """Get the offset where a removed multi-line field ends."""
    end = end_of_field(record, start)
    if end != -1:
        return end
    # Last field of the entry has no "},": remove up to the closing '}' line
    log.warning("Field without \"},\" terminator, removed up to the end of the entry")
    closing = record.rfind("\n}") + 1
    if closing > start:
        return closing
    return min(end_of_line(record, start) + 1, len(record))


def _key(record: str) -> str:
    start = record.find("{") + 1
    end = record.find(",", start)
    return record[start:end].strip() if start and end != -1 else "?"
