"""CLI application entry point and command routing for geocache-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~geocache_cli.exceptions.GeocacheError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — requests are built, sent, validated
  and rendered by the core layer.
* Command results go to stdout; diagnostics go to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from pydantic import ValidationError

from geocache_cli.cli import exit_codes
from geocache_cli.cli.console import StdoutPrinter, console, get_rich_console
from geocache_cli.cli.parser import DOCTOR, build_parser, parse_invocation
from geocache_cli.config import ClientSettings
from geocache_cli.core.commands import Command, GlobalOptions
from geocache_cli.exceptions import ConfigurationError, EnvironmentError, GeocacheError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER: str = "geocache_cli"


# ---------------------------------------------------------------------------
# Bootstrap helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    """Route package log records to stderr, through Rich when available."""
    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        handler = RichHandler(console=get_rich_console(), show_path=False, show_time=False)
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def _load_settings(options: GlobalOptions) -> ClientSettings:
    """Read environment settings and apply command-line overrides."""
    try:
        return ClientSettings().with_overrides(options)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration: {exc.error_count()} error(s)\n{exc}",
            hint="Check the GEOCACHE_* environment variables and your .env file.",
        ) from exc


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_command(
    command: Command,
    settings: ClientSettings,
    *,
    http_transport: httpx.BaseTransport | None = None,
) -> int:
    """Send one command to the API and print its result.

    Flow:
    1. Build the httpx-backed transport from *settings*.
    2. Dispatch *command* to its handler.
    3. The handler's request is validated and rendered to stdout.
    """
    from geocache_cli.core.dispatcher import dispatch
    from geocache_cli.core.session import Session
    from geocache_cli.infra.http_transport import HttpxTransport

    logger.debug("Using API at %s", settings.base_url)
    with HttpxTransport(settings, transport=http_transport) as transport:
        session = Session(transport=transport, printer=StdoutPrinter(), verbose=settings.verbose)
        dispatch(command, session)
    return exit_codes.SUCCESS


def _handle_doctor(settings: ClientSettings) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from geocache_cli.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    http_transport: httpx.BaseTransport | None = None,
) -> int:
    """Run the geocache CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    http_transport:
        Optional httpx transport (e.g. ``httpx.MockTransport``) used in
        place of real network I/O.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    GeocacheError
        Any failure of the command; :func:`cli` turns it into an exit code.
    """
    parser = build_parser()
    invocation = parse_invocation(argv, parser=parser)

    if invocation.target is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = _load_settings(invocation.options)
    _configure_logging(settings.verbose)

    if invocation.target == DOCTOR:
        return _handle_doctor(settings)

    return _handle_command(invocation.target, settings, http_transport=http_transport)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GeocacheError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
