"""Parsing of ctags ``-n`` output lines.

One output line looks like ``name<TAB>file<TAB>42;"<TAB>kind...``. Only the
name and the line number are kept; every other field is ignored.
"""

from __future__ import annotations

import re

from .types import TagRecord

FIELD_SEPARATOR = "\t"
LINE_NUMBER_FIELD = 2

_DIGITS_RE = re.compile(r"[0-9]+")


def parse_tag_line(raw_line: str) -> TagRecord:
    """Convert one tool output line into a ``TagRecord``.

    Malformed input never raises: a missing line-number field or a field
    without digits yields line ``0``, which sorts first and never wins a lookup
    against real tags.
    """
    text = raw_line.rstrip("\r\n")
    fields = text.split(FIELD_SEPARATOR)
    name = fields[0]

    line = 0
    if len(fields) > LINE_NUMBER_FIELD:
        match = _DIGITS_RE.search(fields[LINE_NUMBER_FIELD])
        if match is not None:
            line = int(match.group(0))
    return TagRecord(name=name, line=line)
