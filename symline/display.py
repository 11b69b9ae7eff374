"""Status-line and title display state.

The cache decides whether the editor chrome has to be redrawn at all. A redraw
the editor does not need can reset transient UI state (such as the desired
cursor column), so an unchanged tag name never triggers one. The text built
here depends only on the tag name and the ruler setting; the host draws the
file name and the cursor position around it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

RULER_TAG_WIDTH = 30


@dataclass
class ViewDisplayState:
    """Last tag name written to one view's status line."""

    last_name: str = ""


@dataclass
class ProcessDisplayState:
    """Title state shared by all views.

    ``None`` means nothing has been shown yet, so the first refresh fires.
    """

    last_title_name: str | None = None
    last_ruler: bool | None = None


@dataclass(frozen=True)
class RefreshResult:
    status_line_needs_update: bool
    title_needs_update: bool


@dataclass
class DisplayCache:
    show_in_status_line: bool = False
    show_in_title: bool = True
    process_state: ProcessDisplayState = field(default_factory=ProcessDisplayState)

    def refresh(self, view_state: ViewDisplayState, current_name: str, ruler_enabled: bool) -> RefreshResult:
        """Report which displays changed and remember what they now show.

        The status line is redrawn when the name changed or when the ruler was
        toggled, since the ruler changes the status-line layout. The title only
        depends on the name.
        """
        process = self.process_state
        status_needed = False
        if self.show_in_status_line:
            status_needed = current_name != view_state.last_name or ruler_enabled != process.last_ruler
            if status_needed:
                view_state.last_name = current_name
        process.last_ruler = ruler_enabled

        title_needed = False
        if self.show_in_title:
            title_needed = current_name != process.last_title_name
            if title_needed:
                process.last_title_name = current_name

        return RefreshResult(status_line_needs_update=status_needed, title_needs_update=title_needed)


def format_status_line(tag_name: str, ruler: bool) -> str:
    """Build the tag segment of the status line.

    With the ruler on, the segment has a fixed width so the host's ruler keeps
    its column while the tag changes.
    """
    if not ruler:
        return tag_name
    if len(tag_name) > RULER_TAG_WIDTH:
        tag_name = tag_name[: RULER_TAG_WIDTH - 3] + "..."
    return f"{tag_name:<{RULER_TAG_WIDTH}}"


def format_title(tag_name: str) -> str:
    """Build the suffix the host appends to its window title: `` - tag``."""
    return f" - {tag_name}" if tag_name else ""
