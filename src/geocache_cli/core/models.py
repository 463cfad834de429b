"""Wire-level value objects exchanged between core and transport.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependency on
the HTTP library actually used to send them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Outgoing request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApiRequest:
    """One call against the API, relative to the configured base URL."""

    method: str
    """HTTP verb (``GET``, ``POST``, ``PUT``, ``DELETE``)."""

    path: str
    """Path below the base URL, always starting with ``/``."""

    body: dict[str, Any] | None = None
    """JSON body, or ``None`` to send no body at all."""

    query: dict[str, Any] = field(default_factory=dict)
    """Query-string parameters.  Only present keys are sent."""


# ---------------------------------------------------------------------------
# Incoming response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RawResponse:
    """Undecoded server answer as handed back by the transport."""

    status_code: int
    content: bytes
    url: str = ""


def sparse(**fields: Any) -> dict[str, Any]:
    """Build a dict that only contains the keyword arguments that are not ``None``.

    The server distinguishes an omitted field from one set to an empty
    value, so unset options must never be serialised as ``null``.
    """
    return {key: value for key, value in fields.items() if value is not None}
