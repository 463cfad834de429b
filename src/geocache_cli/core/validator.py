"""Response validation — the single choke point shared by every handler.

Steps, in order:

1. Send the request; a transport failure aborts immediately.
2. Decode the body as JSON.
3. In verbose mode, echo the decoded value before any other check.
4. If the top-level ``error`` flag is ``true``, print the server's
   payload and abort with :class:`ApplicationError`.
5. Otherwise hand the decoded value back to the handler.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from geocache_cli.core.models import ApiRequest, RawResponse
from geocache_cli.core.protocols import Printer, Transport
from geocache_cli.core.render import ERROR_FIELD, field_lines_without_error, pretty
from geocache_cli.exceptions import (
    ApplicationError,
    GeocacheError,
    InvalidResponseBodyError,
    TransportError,
)

logger = logging.getLogger(__name__)


class ResponseValidator:
    """Turns raw transport results into decoded, error-checked values.

    Parameters
    ----------
    printer:
        Sink for the verbose echo and the server's error payload.
    verbose:
        When ``True``, every decoded response is printed in full.
    """

    def __init__(self, printer: Printer, *, verbose: bool = False) -> None:
        self._printer: Printer = printer
        self._verbose: bool = verbose

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def exchange(self, transport: Transport, request: ApiRequest) -> Any:
        """Send *request* through *transport* and validate the answer.

        Raises
        ------
        TransportError
            If the request could not be completed.
        InvalidResponseBodyError
            If the body is not valid JSON.
        ApplicationError
            If the server flagged the response with ``"error": true``.
        """
        logger.debug(
            "%s %s fields=%s query=%s",
            request.method,
            request.path,
            sorted(request.body or ()),
            request.query,
        )
        response = self._send(transport, request)
        return self.validate(response)

    def validate(self, response: RawResponse) -> Any:
        """Decode and error-check *response* (steps 2–5)."""
        value = self._decode(response)

        if self._verbose:
            self._printer.line("Server response:")
            self._printer.line(pretty(value))

        self._check_server_error(value)
        return value

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def _send(transport: Transport, request: ApiRequest) -> RawResponse:
        """Call the transport and ensure only our exceptions escape."""
        try:
            return transport.send(request)
        except GeocacheError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise TransportError(f"Unexpected transport error: {exc}") from exc

    @staticmethod
    def _decode(response: RawResponse) -> Any:
        """Parse the body as JSON or raise :class:`InvalidResponseBodyError`."""
        try:
            return json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidResponseBodyError(
                f"Server returned invalid JSON: {exc}",
                hint=f"HTTP status was {response.status_code}. Check --ip/--port point at the API.",
            ) from exc

    def _check_server_error(self, value: Any) -> None:
        """Abort when the server reported an application-level failure."""
        if not isinstance(value, dict):
            return
        flag = value.get(ERROR_FIELD)
        if isinstance(flag, bool) and flag:
            self._printer.line("Server returned an error!")
            for text in field_lines_without_error(value):
                self._printer.line(text)
            payload = {key: item for key, item in value.items() if key != ERROR_FIELD}
            raise ApplicationError("The server rejected the request.", payload=payload)
