"""Custom exception hierarchy for geocache-cli.

All exceptions that cross layer boundaries must inherit from
:class:`GeocacheError`.  Raw third-party exceptions (httpx, pydantic,
json) must NEVER propagate beyond the layer that produced them — they
must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
GeocacheError
├── TransportError
├── InvalidResponseBodyError
│   └── MissingFieldError
├── ApplicationError
├── InternalDispatchError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from typing import Any


class GeocacheError(Exception):
    """Base exception for all geocache-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Transport -------------------------------------------------------------

class TransportError(GeocacheError):
    """Raised when the HTTP exchange itself fails (connect, timeout, protocol)."""


# --- Response body ---------------------------------------------------------

class InvalidResponseBodyError(GeocacheError):
    """Raised when the server response cannot be decoded as JSON."""


class MissingFieldError(InvalidResponseBodyError):
    """Raised when a decoded response lacks a field the operation expects."""


# --- Server-reported failure -----------------------------------------------

class ApplicationError(GeocacheError):
    """Raised when the server answers with ``"error": true``."""

    def __init__(
        self,
        message: str,
        *,
        payload: dict[str, Any] | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.payload: dict[str, Any] = dict(payload or {})
        """The server's response object, minus the ``error`` flag."""


# --- Internal consistency --------------------------------------------------

class InternalDispatchError(GeocacheError):
    """Raised when no handler exists for a parsed command."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(GeocacheError):
    """Raised when environment settings fail validation."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(GeocacheError):
    """Raised when a required runtime dependency is not available."""
