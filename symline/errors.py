"""Exception types used inside symline.

None of these reach the editor user: generation failures are logged and the
document keeps its previous tags.
"""

from __future__ import annotations


class SymlineError(Exception):
    """Base class for symline errors."""


class GenerationError(SymlineError):
    """Tag generation could not be started for a document."""


class ToolUnavailableError(GenerationError):
    """The tag tool binary is missing or cannot be executed."""


class FileUnreadableError(GenerationError):
    """The document path is empty or does not name a readable file."""


class ConfigError(SymlineError):
    """A configuration value has the wrong type."""
