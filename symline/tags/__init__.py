"""Tag list model, ctags output parsing, generation and lookup."""

from __future__ import annotations

from .generator import GenerationRun, TagGenerator, build_tag_command
from .locator import enclosing_tag, lookup
from .parser import parse_tag_line
from .types import TagList, TagRecord

__all__ = [
    "GenerationRun",
    "TagGenerator",
    "TagList",
    "TagRecord",
    "build_tag_command",
    "enclosing_tag",
    "lookup",
    "parse_tag_line",
]
