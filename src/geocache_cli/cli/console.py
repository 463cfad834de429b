"""CLI console helpers with optional Rich support.

Two sinks exist:

* ``console`` — diagnostics (errors, hints, doctor output) on stderr.
* :class:`StdoutPrinter` — command results on stdout, one line at a time,
  with Rich markup and highlighting disabled so server data is printed
  verbatim.

This module intentionally avoids module-level imports of Rich so
bootstrap paths (``--help``, ``--version``) remain functional even when
it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from geocache_cli.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (default) or stdout."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


class StdoutPrinter:
	"""Line sink for command results.

	Satisfies :class:`~geocache_cli.core.protocols.Printer` structurally.
	Lines are never wrapped or re-highlighted: server values such as
	``[1, 2]`` must not be mistaken for Rich markup.
	"""

	def line(self, text: str = "") -> None:
		try:
			rich_console = get_rich_console(stderr=False)
		except EnvironmentError:
			print(text)
			return
		rich_console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
