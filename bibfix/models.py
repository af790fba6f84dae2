"""Data models for bib-file fixing."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import ABSTRACT_FIELD, ANNOTE_FIELD, URL_EXCEPTION_TYPES

# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class FixOptions:
    """Switches controlling which fixes the rewriter applies.

    Defaults reproduce the usual cleanup: annotations and abstracts are dropped,
    urls are dropped except for web pages and unpublished works (and even there
    when a doi is present), and no year backfill happens.
    """

    keep_annote: bool = False
    keep_abstract: bool = False
    url_exception_types: frozenset[str] = URL_EXCEPTION_TYPES
    every_entry_url_exception: bool = False  # Treat every entry type as a url exception
    keep_url_only_if_no_doi: bool = True
    turn_issn_into_missing_year: bool = False  # Rename issn to year when year is missing

    def is_url_exception(self, entry_type: str) -> bool:
        """Check whether entries of this type keep their url field."""
        if self.every_entry_url_exception:
            return True
        return entry_type.lower() in {t.lower() for t in self.url_exception_types}

    def keeps_multiline_field(self, name: str) -> bool:
        """Check whether an annote/abstract field survives."""
        if name == ANNOTE_FIELD:
            return self.keep_annote
        if name == ABSTRACT_FIELD:
            return self.keep_abstract
        return True


# =============================================================================
# Results
# =============================================================================


@dataclass
class RecordResult:
    """Result of rewriting a single bib entry."""

    text: str
    entry_type: str
    title_fixed: bool = False
    month_fixed: bool = False
    braces_unescaped: int = 0
    removed_fields: list[str] = field(default_factory=list)
    year_backfilled: bool = False

    @property
    def changed(self) -> bool:
        return bool(
            self.title_fixed
            or self.month_fixed
            or self.braces_unescaped
            or self.removed_fields
            or self.year_backfilled
        )


@dataclass
class FixReport:
    """Statistics for one run over a bib file."""

    total_records: int = 0
    changed_records: int = 0
    titles_fixed: int = 0
    months_fixed: int = 0
    braces_unescaped: int = 0
    years_backfilled: int = 0
    removed_fields: dict[str, int] = field(default_factory=dict)
    elapsed: float = 0.0  # Seconds spent fixing entries

    def add_result(self, result: RecordResult) -> None:
        """Add a record result to the report."""
        self.total_records += 1
        if result.changed:
            self.changed_records += 1
        if result.title_fixed:
            self.titles_fixed += 1
        if result.month_fixed:
            self.months_fixed += 1
        self.braces_unescaped += result.braces_unescaped
        if result.year_backfilled:
            self.years_backfilled += 1
        for name in result.removed_fields:
            self.removed_fields[name] = self.removed_fields.get(name, 0) + 1

    @property
    def total_removed(self) -> int:
        return sum(self.removed_fields.values())
