"""Host-facing entry points.

An editor integration owns one ``TagSession``. It calls ``open_document``,
``document_saved`` and ``generate`` from its event handlers, and
``refresh_display`` from an idle timer (``IDLE_REFRESH_INTERVAL_MS``).
Everything here runs on the host's control thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import SymlineConfig
from .display import DisplayCache, ViewDisplayState, format_status_line, format_title
from .document import Document
from .tags.generator import GenerationRun, TagGenerator
from .tags.locator import lookup
from .tags.types import TagList

logger = logging.getLogger(__name__)

IDLE_REFRESH_INTERVAL_MS = 500


@dataclass(frozen=True)
class DisplayUpdate:
    """Result of one refresh tick; text is ``None`` when nothing must be redrawn."""

    tag_name: str
    status_line_needs_update: bool
    title_needs_update: bool
    status_line: str | None = None
    title: str | None = None


def _document_key(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


class TagSession:
    def __init__(self, config: SymlineConfig | None = None, generator: TagGenerator | None = None) -> None:
        self.config = config or SymlineConfig()
        self.generator = generator or TagGenerator()
        self.display = DisplayCache(
            show_in_status_line=self.config.show_in_status_line,
            show_in_title=self.config.show_in_title,
        )
        self._documents: dict[Path, Document] = {}

    def document(self, path: Path | str) -> Document | None:
        return self._documents.get(_document_key(path))

    def open_document(self, path: Path | str, generate: bool = True) -> Document:
        """Register a buffer (empty tag list) and start its first generation."""
        key = _document_key(path)
        document = self._documents.get(key)
        if document is None:
            document = Document(path=key)
            self._documents[key] = document
        if generate:
            self._start(document)
        return document

    def close_document(self, path: Path | str) -> None:
        """Forget a buffer; runs still in flight for it will not publish."""
        document = self._documents.pop(_document_key(path), None)
        if document is not None:
            document.close()

    def generate(self, path: Path | str) -> GenerationRun | None:
        """Regenerate tags for ``path`` (explicit user command)."""
        return self._start(self.open_document(path, generate=False))

    def document_saved(self, path: Path | str) -> GenerationRun | None:
        if not self.config.regenerate_on_save:
            return None
        return self.generate(path)

    def _start(self, document: Document) -> GenerationRun | None:
        if not self.config.enable_generation:
            logger.debug("tag generation disabled, not generating for %s", document.path)
            return None
        return self.generator.generate(document, self.config.tool_path, self.config.tool_args)

    def pump(self) -> None:
        self.generator.pump()

    def wait(self, run: GenerationRun, timeout: float | None = None) -> bool:
        return self.generator.wait(run, timeout)

    def tags(self, path: Path | str) -> TagList:
        document = self.document(path)
        return TagList.EMPTY if document is None else document.tags

    def lookup(self, path: Path | str, cursor_line: int) -> str:
        """Name of the symbol enclosing ``cursor_line`` (1-based) in ``path``."""
        return lookup(self.tags(path), cursor_line)

    def refresh_display(
        self,
        view_state: ViewDisplayState,
        path: Path | str,
        cursor_line: int,
        ruler: bool = False,
    ) -> DisplayUpdate:
        """Idle-tick work: publish finished runs and compute chrome updates.

        The returned text is the tag segment only. The host keeps drawing the
        file name and the ruler itself, so a cursor move or a buffer switch that
        keeps the tag name needs no redraw.
        """
        self.pump()
        name = self.lookup(path, cursor_line)
        result = self.display.refresh(view_state, name, ruler)

        status_line = format_status_line(name, ruler) if result.status_line_needs_update else None
        title = format_title(name) if result.title_needs_update else None
        return DisplayUpdate(
            tag_name=name,
            status_line_needs_update=result.status_line_needs_update,
            title_needs_update=result.title_needs_update,
            status_line=status_line,
            title=title,
        )
