"""Exception hierarchy shared across the package."""

from __future__ import annotations


class PreflightError(Exception):
    """Base class for all artpreflight errors."""


class NoDocumentError(PreflightError):
    """Raised when a run is started without an open document."""

    def __init__(self, message: str = "No document is open.") -> None:
        super().__init__(message)


class ConfigurationError(PreflightError):
    """Raised when the rule catalogue and configured messages disagree."""


class SceneFormatError(PreflightError):
    """Raised when a scene description cannot be turned into a document."""
