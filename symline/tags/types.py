"""Shared tag datatypes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class TagRecord:
    """One symbol emitted by the tag tool and the line where it starts."""

    name: str
    line: int  # 1-based, 0 when the tool line carried no number


@dataclass(frozen=True)
class TagList:
    """Tags of one document, sorted ascending by starting line.

    Equal lines keep the order in which the tool emitted them. Instances are
    never mutated; a document swaps in a new list on every regeneration.
    """

    records: tuple[TagRecord, ...] = ()

    EMPTY: ClassVar[TagList]

    @classmethod
    def from_records(cls, records: Iterable[TagRecord]) -> TagList:
        """Build a list from records in arrival order using a stable line sort."""
        ordered = tuple(sorted(records, key=lambda record: record.line))
        if not ordered:
            return cls.EMPTY
        return cls(records=ordered)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TagRecord]:
        return iter(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)


TagList.EMPTY = TagList()
