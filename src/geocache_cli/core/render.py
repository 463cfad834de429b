"""Pure presentation helpers for decoded server values.

Every function here returns strings — no I/O.  Handlers pass the
resulting lines to a :class:`~geocache_cli.core.protocols.Printer`.
"""

from __future__ import annotations

import json
from collections.abc import Container
from typing import Any

INDENT: str = "    "
"""Prefix of every field line under a heading."""

ERROR_FIELD: str = "error"
"""Top-level flag the server uses to signal an application failure."""


def format_value(value: Any) -> str:
    """Render *value* as compact JSON (strings keep their quotes)."""
    return json.dumps(value, ensure_ascii=False)


def field_lines(value: Any, *, exclude: Container[str] = ()) -> list[str]:
    """Return one ``key: value`` line per field of an object.

    Non-object values produce a single indented line with the value
    itself.  Keys listed in *exclude* are skipped.
    """
    if isinstance(value, dict):
        return [
            f"{INDENT}{key}: {format_value(item)}"
            for key, item in value.items()
            if key not in exclude
        ]
    return [f"{INDENT}{format_value(value)}"]


def field_lines_without_error(value: Any) -> list[str]:
    """Shorthand for :func:`field_lines` hiding the ``error`` flag."""
    return field_lines(value, exclude=(ERROR_FIELD,))


def pretty(value: Any) -> str:
    """Multi-line JSON dump used by the verbose echo."""
    return json.dumps(value, indent=2, ensure_ascii=False)
