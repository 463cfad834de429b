"""Per-invocation context threaded through every handler."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from geocache_cli.core.models import ApiRequest
from geocache_cli.core.protocols import Printer, Transport
from geocache_cli.core.validator import ResponseValidator


@dataclass(frozen=True, slots=True)
class Session:
    """Bundles the transport, the output sink and the validator.

    Handlers never touch the transport directly: :meth:`exchange` routes
    every request through the shared :class:`ResponseValidator`.
    """

    transport: Transport
    printer: Printer
    verbose: bool = False
    validator: ResponseValidator = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "validator",
            ResponseValidator(self.printer, verbose=self.verbose),
        )

    def exchange(self, request: ApiRequest) -> Any:
        """Send *request* and return the validated, decoded response."""
        return self.validator.exchange(self.transport, request)

    def emit(self, *lines: str) -> None:
        """Print each of *lines*."""
        for text in lines:
            self.printer.line(text)

    def emit_all(self, lines: Iterable[str]) -> None:
        for text in lines:
            self.printer.line(text)
