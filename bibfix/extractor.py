"""Locate bib entries inside the raw text of a Mendeley bib-file."""

from collections.abc import Iterator

from .constants import BIB_TYPE_MAX


def next_record(buffer: str, cursor: int) -> tuple[str, int] | None:
    """Find the next bib entry at or after cursor.

    An entry starts at '@' and ends at a '}' that is alone at the start of a line,
    i.e. preceded by a newline and followed by a newline or the end of the buffer.
    Braces inside annotations never sit alone on a line, so they do not end the entry.

    Args:
        buffer: Whole file content.
        cursor: Offset to start searching from.

    Returns:
        Tuple of (entry text including the closing '}' and its newline, offset just
        past the closing '}'), or None when no complete entry remains. A trailing
        entry without its closing line is dropped.
    """
    anchor = buffer.find("@", cursor)
    if anchor == -1:
        return None

    length = len(buffer)
    index = anchor + 1
    while index < length:
        if (
            buffer[index] == "}"
            and buffer[index - 1] == "\n"
            and (index + 1 == length or buffer[index + 1] == "\n")
        ):
            break
        index += 1
    else:
        return None

    return buffer[anchor : index + 2], index + 1


def iter_records(buffer: str) -> Iterator[str]:
    """Yield every complete bib entry in buffer, in file order."""
    cursor = 0
    while True:
        found = next_record(buffer, cursor)
        if found is None:
            return
        record, cursor = found
        yield record


def get_entry_type(record: str) -> str:
    """Get the entry type of a record, e.g. "article" for "@article{key,".

    Only the first BIB_TYPE_MAX - 1 characters after '@' are considered.
    """
    end = record.find("{", 1, BIB_TYPE_MAX)
    if end == -1:
        end = min(len(record), BIB_TYPE_MAX)
    return record[1:end].strip().lower()
