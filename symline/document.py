"""Per-buffer context shared by the generator (writer) and lookups (reader)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .tags.types import TagList

if TYPE_CHECKING:
    from .tags.generator import GenerationRun


@dataclass(eq=False)
class Document:
    """One open buffer: its path, the published tags and in-flight runs.

    ``tags`` is only ever replaced as a whole, by ``TagGenerator.pump`` on the
    control thread.
    """

    path: Path
    tags: TagList = TagList.EMPTY
    in_flight: list[GenerationRun] = field(default_factory=list)
    published_run_id: int = 0
    closed: bool = False
    _next_run_id: int = field(default=1, repr=False)

    def allocate_run_id(self) -> int:
        run_id = self._next_run_id
        self._next_run_id += 1
        return run_id

    def publish(self, run_id: int, tags: TagList) -> bool:
        """Make ``tags`` the visible list.

        Results of a run started before the currently published one are
        dropped, as are results arriving after the document was closed.
        """
        if self.closed or run_id < self.published_run_id:
            return False
        self.tags = tags
        self.published_run_id = run_id
        return True

    def close(self) -> None:
        self.closed = True
        self.tags = TagList.EMPTY
        self.in_flight.clear()
