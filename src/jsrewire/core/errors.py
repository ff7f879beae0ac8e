"""Exception types raised by the rewire pass."""

from __future__ import annotations


class RewireError(Exception):
    """Raised when a module cannot be rewired.

    Attributes:
        errors: Error messages collected while processing the module.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors or [])


class SourceParseError(RewireError):
    """Raised when the module source contains syntax errors."""
