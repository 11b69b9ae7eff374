"""Line-to-symbol lookup against a published ``TagList``."""

from __future__ import annotations

from .types import TagList, TagRecord


def enclosing_tag(tag_list: TagList, cursor_line: int) -> TagRecord | None:
    """Return the last tag starting at or before ``cursor_line``.

    The list is sorted by line, so the scan stops at the first tag past the
    cursor. Records without a line number (line 0) never match. Tag lists hold
    tens to a few hundred entries; a linear scan is enough.
    """
    found: TagRecord | None = None
    for record in tag_list:
        if record.line > cursor_line:
            break
        if record.line >= 1:
            found = record
    return found


def lookup(tag_list: TagList, cursor_line: int) -> str:
    """Return the name of the symbol enclosing ``cursor_line`` or ``""``."""
    record = enclosing_tag(tag_list, cursor_line)
    return "" if record is None else record.name
