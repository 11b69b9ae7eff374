"""Asynchronous ctags runs with publish-on-completion.

Each ``generate`` call starts the tag tool in its own subprocess. A daemon
reader thread parses output lines as they arrive and puts the records on the
run's private channel. ``pump`` runs on the host's control thread: it moves
records from channels into each run's accumulator and, once a run's channel
is closed, sorts the accumulator and replaces the document's tag list in one
assignment.

Superseded runs are never cancelled. Their result is dropped at publish time
when a newer run of the same document has already published, and a run whose
tool exits with a non-zero status never replaces the current tags.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from queue import Empty, Queue
from typing import TYPE_CHECKING

from ..errors import FileUnreadableError, GenerationError, ToolUnavailableError
from .parser import parse_tag_line
from .types import TagList, TagRecord

if TYPE_CHECKING:
    from ..document import Document

logger = logging.getLogger(__name__)

OBLIGATORY_TOOL_ARGS: tuple[str, ...] = ("-n", "--sort=no", "-o", "-")

_CHANNEL_CLOSED = object()


def build_tag_command(path: Path, tool_path: str, tool_args: Sequence[str]) -> list[str]:
    """Return the argv for one run: user args, fixed flags, then the file."""
    return [tool_path, *tool_args, *OBLIGATORY_TOOL_ARGS, str(path)]


def format_tag_command(command: Sequence[str]) -> str:
    """Shell-quoted form of ``command`` for log output."""
    return shlex.join(command)


@dataclass(eq=False)
class GenerationRun:
    """One tag-tool invocation for one document.

    ``records`` is private to the run until it is published.
    """

    run_id: int
    document: Document
    command: list[str]
    process: subprocess.Popen | None = None
    channel: Queue = field(default_factory=Queue)
    records: list[TagRecord] = field(default_factory=list)
    returncode: int | None = None
    closed: bool = False
    published: bool = False
    reader_done: threading.Event = field(default_factory=threading.Event)


class TagGenerator:
    """Start tag runs and publish their results from the control thread."""

    def __init__(
        self,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._popen = popen
        self._which = which
        self._runs: list[GenerationRun] = []
        self._completed: Queue[GenerationRun] = Queue()

    @property
    def in_flight(self) -> list[GenerationRun]:
        return list(self._runs)

    def _check_file(self, path: Path) -> None:
        if not str(path) or str(path) == ".":
            raise FileUnreadableError("empty file path")
        if not path.is_file() or not os.access(path, os.R_OK):
            raise FileUnreadableError(f"not a readable file: {path}")

    def _check_tool(self, tool_path: str) -> None:
        if not tool_path or self._which(tool_path) is None:
            raise ToolUnavailableError(f"tag tool not found: {tool_path!r}")

    def _spawn(self, run: GenerationRun) -> None:
        try:
            run.process = self._popen(
                run.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise ToolUnavailableError(f"failed to run {run.command[0]}: {exc}") from exc

        reader = threading.Thread(
            target=self._read_output,
            args=(run,),
            name=f"symline-tags-{run.run_id}",
            daemon=True,
        )
        reader.start()

    def _read_output(self, run: GenerationRun) -> None:
        """Producer: parse output lines onto the run's channel, then close it."""
        process = run.process
        assert process is not None
        try:
            assert process.stdout is not None
            for raw in process.stdout:
                run.channel.put(parse_tag_line(raw))
        except (OSError, ValueError) as exc:
            logger.debug("reading tag output for %s failed: %s", run.document.path, exc)
        finally:
            try:
                run.returncode = process.wait()
            finally:
                run.channel.put(_CHANNEL_CLOSED)
                self._completed.put(run)
                run.reader_done.set()

    def generate(self, document: Document, tool_path: str, tool_args: Sequence[str]) -> GenerationRun | None:
        """Start a tag run for ``document`` and return it without waiting.

        Returns ``None`` when the run could not start; the document's current
        tags stay as they were.
        """
        path = document.path
        try:
            self._check_file(path)
            self._check_tool(tool_path)
            run = GenerationRun(
                run_id=document.allocate_run_id(),
                document=document,
                command=build_tag_command(path, tool_path, tool_args),
            )
            self._spawn(run)
        except GenerationError as exc:
            logger.debug("tag generation skipped: %s", exc)
            return None

        logger.debug("run %d started: %s", run.run_id, format_tag_command(run.command))
        document.in_flight.append(run)
        self._runs.append(run)
        return run

    def _drain(self, run: GenerationRun) -> None:
        """Consumer: move queued records into the run's accumulator."""
        while not run.closed:
            try:
                item = run.channel.get_nowait()
            except Empty:
                return
            if item is _CHANNEL_CLOSED:
                run.closed = True
            else:
                run.records.append(item)

    def _publish(self, run: GenerationRun) -> None:
        document = run.document
        if run in self._runs:
            self._runs.remove(run)
        if run in document.in_flight:
            document.in_flight.remove(run)

        if run.returncode != 0:
            logger.debug(
                "run %d for %s exited with %s, keeping previous tags",
                run.run_id,
                document.path,
                run.returncode,
            )
            return

        tags = TagList.from_records(run.records)
        run.published = document.publish(run.run_id, tags)
        if run.published:
            logger.debug("run %d published %d tags for %s", run.run_id, len(tags), document.path)
        else:
            logger.debug("run %d for %s superseded, result dropped", run.run_id, document.path)

    def pump(self) -> list[GenerationRun]:
        """Accumulate streamed records and publish runs that completed.

        Completed runs are published in completion order. Must be called from
        the thread that reads document tags.
        """
        for run in self._runs:
            self._drain(run)

        finished: list[GenerationRun] = []
        while True:
            try:
                run = self._completed.get_nowait()
            except Empty:
                break
            self._drain(run)
            self._publish(run)
            finished.append(run)
        return finished

    def wait(self, run: GenerationRun, timeout: float | None = None) -> bool:
        """Block until ``run``'s process exited, then pump. Returns completion."""
        done = run.reader_done.wait(timeout)
        self.pump()
        return done and run.closed
