"""``geocache doctor`` — environment and connectivity diagnostics.

Gathers local information plus one reachability probe of the configured
API and renders a Rich table summarising whether the client is ready to
talk to the server.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from geocache_cli.cli import exit_codes
from geocache_cli.cli.console import console
from geocache_cli.config import ClientSettings
from geocache_cli.exceptions import TransportError
from geocache_cli.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _geocache_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the geocache-cli version row."""
    return "geocache-cli", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _httpx_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the httpx row."""
    try:
        import httpx
    except ImportError:
        return "httpx", "NOT INSTALLED", "[red]FAIL[/red]"
    return "httpx", httpx.__version__, "[green]OK[/green]"


def _base_url_check(settings: ClientSettings) -> tuple[str, str, str]:
    return "API URL", settings.base_url, "[green]OK[/green]"


def _api_key_check(settings: ClientSettings) -> tuple[str, str, str]:
    """An absent key is only a warning: ``user create`` works without one."""
    if settings.api_key:
        return "API key", "configured", "[green]OK[/green]"
    return "API key", "not set", "[yellow]WARN[/yellow]"


def _server_check(settings: ClientSettings) -> tuple[str, str, str]:
    """Return (label, value, status) for one GET of the API base URL."""
    from geocache_cli.infra.http_transport import HttpxTransport

    try:
        with HttpxTransport(settings) as transport:
            status_code = transport.probe()
    except TransportError as exc:
        return "Server", str(exc), "[yellow]WARN[/yellow]"
    return "Server", f"HTTP {status_code}", "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ngeocache doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<38} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<14} {value:<38} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: ClientSettings) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _geocache_version_check(),
        _python_version_check(),
        _httpx_version_check(),
        _base_url_check(settings),
        _api_key_check(settings),
        _server_check(settings),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="geocache doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
