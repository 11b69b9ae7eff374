"""Public package surface for symline.

Exports ``main`` for programmatic CLI invocation and ``TagSession`` for
editor integrations.
"""

from __future__ import annotations

from .session import IDLE_REFRESH_INTERVAL_MS, TagSession


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["IDLE_REFRESH_INTERVAL_MS", "TagSession", "main"]
