"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
must satisfy.  Core code depends ONLY on these protocols — never on
concrete implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from geocache_cli.core.models import ApiRequest, RawResponse


class Transport(Protocol):
    """Contract for the HTTP backend.

    Implementations come pre-configured with the base URL, connect
    timeout, user agent and optional API-key header.
    """

    def send(self, request: ApiRequest) -> RawResponse:
        """Perform *request* and return the undecoded response.

        Implementations must map all backend-specific exceptions to
        :class:`~geocache_cli.exceptions.TransportError`.

        Raises
        ------
        TransportError
            When the connection fails, times out, or the exchange is
            otherwise aborted.
        """
        ...  # pragma: no cover


class Printer(Protocol):
    """Line-oriented sink for command results (stdout in the CLI)."""

    def line(self, text: str = "") -> None:
        """Write *text* followed by a newline."""
        ...  # pragma: no cover
