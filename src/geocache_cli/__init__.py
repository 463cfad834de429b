"""geocache-cli — command-line client for the geocaching REST API.

Manages user accounts, API keys, and cache records by translating
subcommands into HTTP requests.
"""

from geocache_cli.version import __version__

__all__: list[str] = ["__version__"]
