"""httpx backed implementation of :class:`~geocache_cli.core.protocols.Transport`.

This module is the **only** place in the codebase that imports ``httpx``.
All httpx exceptions are caught here and re-raised as
:class:`~geocache_cli.exceptions.TransportError` — nothing raw escapes
the infrastructure boundary.
"""

from __future__ import annotations

import logging

import httpx

from geocache_cli.config import ClientSettings
from geocache_cli.core.models import ApiRequest, RawResponse
from geocache_cli.exceptions import TransportError

logger = logging.getLogger(__name__)

API_KEY_HEADER: str = "x-api-key"


def build_client(
    settings: ClientSettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an ``httpx.Client`` bound to the configured API.

    Centralises base URL, timeouts and headers so every request carries
    the same user agent and, when configured, the API key.
    """
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.api_key:
        headers[API_KEY_HEADER] = settings.api_key

    return httpx.Client(
        base_url=settings.base_url,
        timeout=httpx.Timeout(
            settings.read_timeout_seconds,
            connect=settings.connect_timeout_seconds,
        ),
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """Concrete :class:`Transport` backed by a synchronous ``httpx.Client``.

    Usage::

        with HttpxTransport(settings) as transport:
            response = transport.send(ApiRequest("GET", "/user/1"))

    This class satisfies the :class:`~geocache_cli.core.protocols.Transport`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings: ClientSettings = settings
        self._client: httpx.Client = build_client(settings, transport=transport)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def send(self, request: ApiRequest) -> RawResponse:
        """Perform *request* against the configured base URL.

        Raises
        ------
        TransportError
            For any httpx failure (connect error, timeout, protocol error).
        """
        try:
            response = self._client.request(
                request.method,
                request.path,
                json=request.body,
                params=request.query or None,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request timed out: {exc!r}",
                hint=f"Is the API server reachable at {self._settings.base_url}?",
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request failed: {exc!r}",
                hint=f"Check that the API server is running at {self._settings.base_url} "
                "(see --ip and --port).",
            ) from exc

        logger.debug("%s %s -> HTTP %s", request.method, response.url, response.status_code)
        return RawResponse(
            status_code=response.status_code,
            content=response.content,
            url=str(response.url),
        )

    def probe(self) -> int:
        """GET the base URL and return the status code (used by ``doctor``)."""
        try:
            return self._client.get("").status_code
        except httpx.HTTPError as exc:
            raise TransportError(f"Server unreachable: {exc!r}") from exc
