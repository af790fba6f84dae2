"""Text scanning utilities for bibfix.

All helpers work on offsets into a record's text and never modify it.
"""

import re
from dataclasses import dataclass

from .constants import FIELD_TERMINATOR

# "name = value" at the start of a line; the value starts after the match
FIELD_LINE_PATTERN = re.compile(r"^([ \t]*)([A-Za-z][\w-]*)[ \t]*=[ \t]*")

# Mendeley's "Escape LaTeX special characters" option writes { as {\{} and } as {\}}
ESCAPED_BRACE_PATTERN = re.compile(r"\{\\([{}])\}")


@dataclass
class FieldLine:
    """Position of a field's name and value within one line."""

    indent: int  # Length of leading whitespace (name starts here)
    name: str  # Lower-cased field name
    value_start: int
    value_end: int  # Exclusive, before the trailing comma and line break


def end_of_line(body: str, start: int) -> int:
    """Find the offset of the next newline at or after start.

    Returns len(body) if there is none (last line of a record at end of file).
    """
    index = body.find("\n", start)
    return len(body) if index == -1 else index


def end_of_field(body: str, start: int) -> int:
    """Find the end of a possibly multi-line field value.

    The field ends with the first "},\\n" at or after start. Single '}' characters
    inside the value do not end it.

    Returns:
        Offset just past the terminating newline, or -1 if there is no terminator.
    """
    index = body.find(FIELD_TERMINATOR, start)
    if index == -1:
        return -1
    return index + len(FIELD_TERMINATOR)


def split_field_line(line: str) -> FieldLine | None:
    """Split a line of the form "name = value," into name and value span.

    Args:
        line: One line of a bib entry, with or without its line break.

    Returns:
        FieldLine, or None if the line does not start with a field assignment.
    """
    match = FIELD_LINE_PATTERN.match(line)
    if not match:
        return None

    value_end = len(line)
    if line.endswith("\n"):
        value_end -= 1
    if value_end > match.end() and line[value_end - 1] == ",":
        value_end -= 1

    return FieldLine(
        indent=len(match.group(1)),
        name=match.group(2).lower(),
        value_start=match.end(),
        value_end=value_end,
    )


def unescape_braces(text: str) -> tuple[str, int]:
    """Replace escaped braces {\\{} and {\\}} with plain { and }.

    Returns:
        Tuple of (fixed text, number of replacements).
    """
    return ESCAPED_BRACE_PATTERN.subn(r"\1", text)


def find_closing_brace(text: str, open_index: int) -> int:
    """Find the brace that closes the one at open_index.

    Braces preceded by a backslash are literal and not counted, so Mendeley's
    escaped sequences balance out.

    Returns:
        Index of the matching '}', or -1 if unbalanced or text[open_index] is not '{'.
    """
    if open_index >= len(text) or text[open_index] != "{":
        return -1

    depth = 0
    for i in range(open_index, len(text)):
        if i > 0 and text[i - 1] == "\\":
            continue
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1
