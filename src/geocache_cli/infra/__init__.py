"""Infrastructure layer — external system integration.

This layer wraps all interaction with the network.  Every raw
third-party exception must be caught here and re-raised as a
:class:`~geocache_cli.exceptions.GeocacheError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from geocache_cli.infra.http_transport import HttpxTransport, build_client

__all__: list[str] = [
    "HttpxTransport",
    "build_client",
]
