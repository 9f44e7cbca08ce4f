"""Exception hierarchy for the asset cooking pipeline."""

from __future__ import annotations


class CookerError(Exception):
    """Base error for asset cooking failures.

    Parameters
    ----------
    message : str
        Human-readable error description.
    exit_code : int, default=1
        Process exit code used by the CLI when the error is fatal.
    """

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class SourceTreeError(CookerError):
    """Raised at startup when the source or output tree is unusable."""


class SettingsError(CookerError):
    """Raised when the settings document cannot be parsed or validated."""


class HandlerError(CookerError):
    """Raised by a handler when a single asset cannot be converted."""


class HandlerRegistrationError(CookerError):
    """Raised when a handler cannot be registered or loaded."""
