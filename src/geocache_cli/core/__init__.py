"""Core layer — command model, handlers, dispatch and response validation.

Rules
-----
* No ``print()`` calls; output goes through a ``Printer``.
* No direct network I/O; requests go through a ``Transport``.
* No imports from ``cli`` or ``infra``.
"""

from geocache_cli.core.dispatcher import dispatch
from geocache_cli.core.models import ApiRequest, RawResponse
from geocache_cli.core.protocols import Printer, Transport
from geocache_cli.core.session import Session
from geocache_cli.core.validator import ResponseValidator

__all__: list[str] = [
    "ApiRequest",
    "Printer",
    "RawResponse",
    "ResponseValidator",
    "Session",
    "Transport",
    "dispatch",
]
