"""Allow ``python -m geocache_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m geocache_cli`` behaves identically to the ``geocache``
console script.
"""

from __future__ import annotations

from geocache_cli.cli.app import cli

if __name__ == "__main__":
    cli()
