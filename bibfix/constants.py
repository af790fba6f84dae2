"""Constants for bibfix."""

DEFAULT_INPUT = "library.bib"
DEFAULT_OUTPUT = "library_fixed.bib"

# Entry types that keep their url field. Mendeley exports a "web page" as misc.
URL_EXCEPTION_TYPES = frozenset({"misc", "unpublished"})

# Entry-type tags are read from at most BIB_TYPE_MAX - 1 characters after '@'
BIB_TYPE_MAX = 25

# Closes a multi-line field such as annote or abstract
FIELD_TERMINATOR = "},\n"

MONTH_FIELD = "month"
TITLE_FIELD = "title"
ANNOTE_FIELD = "annote"
ABSTRACT_FIELD = "abstract"
DOI_FIELD = "doi"
FILE_FIELD = "file"
URL_FIELD = "url"
YEAR_FIELD = "year"
ISSN_FIELD = "issn"
