"""Tag generation and display settings.

Settings are read once into an immutable ``SymlineConfig`` and passed to the
session. The optional JSON file is read defensively: a missing, unreadable or
malformed file falls back to the defaults.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "symline"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_TOOL_PATH = "ctags"
DEFAULT_TOOL_ARGS: tuple[str, ...] = (
    "--c-kinds=cfsgu",
    "--c++-kinds=cfsgu",
    "--vim-kinds=f",
    "--if0=yes",
)


def resolve_display_flags(
    show_in_status_line: bool | None,
    show_in_title: bool | None,
) -> tuple[bool, bool]:
    """Return ``(status_line, title)`` display flags.

    When neither flag was set the tag goes to the title only.
    """
    if show_in_status_line is None and show_in_title is None:
        return False, True
    return bool(show_in_status_line), bool(show_in_title)


@dataclass(frozen=True)
class SymlineConfig:
    tool_path: str = DEFAULT_TOOL_PATH
    tool_args: tuple[str, ...] = DEFAULT_TOOL_ARGS
    enable_generation: bool = True
    regenerate_on_save: bool = True
    show_in_status_line: bool = False
    show_in_title: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], strict: bool = False) -> SymlineConfig:
        """Build a config from a JSON-style mapping.

        Unknown keys are ignored. Values of the wrong type are dropped (the
        default is kept) unless ``strict`` is set, in which case they raise
        ``ConfigError``.
        """

        def reject(key: str, value: object) -> None:
            if strict:
                raise ConfigError(f"invalid value for {key!r}: {value!r}")
            logger.debug("ignoring invalid config value %s=%r", key, value)

        values: dict[str, object] = {}

        tool_path = data.get("tool_path")
        if tool_path is not None:
            if isinstance(tool_path, str) and tool_path.strip():
                values["tool_path"] = tool_path.strip()
            else:
                reject("tool_path", tool_path)

        tool_args = data.get("tool_args")
        if tool_args is not None:
            if isinstance(tool_args, str):
                values["tool_args"] = tuple(tool_args.split())
            elif isinstance(tool_args, (list, tuple)) and all(isinstance(arg, str) for arg in tool_args):
                values["tool_args"] = tuple(tool_args)
            else:
                reject("tool_args", tool_args)

        for key in ("enable_generation", "regenerate_on_save"):
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, bool):
                values[key] = value
            else:
                reject(key, value)

        display: dict[str, bool | None] = {"show_in_status_line": None, "show_in_title": None}
        for key in display:
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, bool):
                display[key] = value
            else:
                reject(key, value)
        status_line, title = resolve_display_flags(display["show_in_status_line"], display["show_in_title"])
        values["show_in_status_line"] = status_line
        values["show_in_title"] = title

        return cls(**values)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("could not read config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_symline_config() -> SymlineConfig:
    """Return settings from the config file merged over the defaults."""
    return SymlineConfig.from_mapping(load_config())
