"""Argument parser — turns ``argv`` into a typed command.

Subcommand tree::

    geocache user create | view | change
    geocache user keys generate | view | revoke
    geocache cache create | find | view | change | delete
    geocache doctor

Global flags (``--api``, ``--ip``, ``--port``, ``--verbose``) are
accepted both before and after the subcommand.  Each leaf parser stores
a ``build`` callable that converts the parsed namespace into its
:mod:`~geocache_cli.core.commands` dataclass.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from geocache_cli.core.commands import (
    CacheChange,
    CacheCreate,
    CacheDelete,
    CacheFind,
    CacheView,
    Command,
    GlobalOptions,
    KeyGenerate,
    KeyRevoke,
    KeyView,
    UserChange,
    UserCreate,
    UserView,
)
from geocache_cli.version import __version__

PROG: str = "geocache"

DOCTOR: Literal["doctor"] = "doctor"


@dataclass(frozen=True, slots=True)
class Invocation:
    """Everything ``main`` needs to know about one run."""

    options: GlobalOptions
    target: Command | Literal["doctor"] | None
    """The command to dispatch, ``"doctor"``, or ``None`` to show help."""


_Builder = Callable[[argparse.Namespace], Command]


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

def _non_negative_int(raw: str) -> int:
    """argparse ``type=`` for key numbers, which are never negative."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _port(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {raw!r}") from None
    if not 0 < value < 65536:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


# ---------------------------------------------------------------------------
# Global flags
# ---------------------------------------------------------------------------

def _global_flags() -> argparse.ArgumentParser:
    """Parent parser shared by the root and every leaf subcommand.

    ``SUPPRESS`` defaults keep a flag given before the subcommand from
    being reset by the leaf parser's own default.
    """
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("global options")
    group.add_argument("--api", metavar="KEY", default=argparse.SUPPRESS, help="API key to access the server.")
    group.add_argument("--ip", metavar="ADDR", default=argparse.SUPPRESS, help="API server IP address (default: 127.0.0.1).")
    group.add_argument("--port", type=_port, default=argparse.SUPPRESS, help="API server port (default: 8000).")
    group.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Verbose mode. Print raw server responses.",
    )
    return parent


def _leaf(
    subparsers: argparse._SubParsersAction,
    name: str,
    help_text: str,
    build: _Builder,
    parent: argparse.ArgumentParser,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(name, help=help_text, description=help_text, parents=[parent])
    parser.set_defaults(build=build)
    return parser


# ---------------------------------------------------------------------------
# user …
# ---------------------------------------------------------------------------

def _add_user_commands(root: argparse._SubParsersAction, parent: argparse.ArgumentParser) -> None:
    user = root.add_parser("user", help="Manipulate users.", description="Manipulate users.", parents=[parent])
    commands = user.add_subparsers(dest="user_command", metavar="COMMAND", required=True)

    create = _leaf(
        commands,
        "create",
        "Create a new user.",
        lambda ns: UserCreate(name=ns.name, email=ns.email, password=ns.pwd),
        parent,
    )
    create.add_argument("-n", "--name", required=True, help="Displayed name of the account.")
    create.add_argument("-e", "--email", required=True, help="Email of the account, must be unique.")
    create.add_argument("-p", "--pwd", required=True, help="Password.")

    view = _leaf(commands, "view", "View a user.", lambda ns: UserView(id=ns.id), parent)
    view.add_argument("-i", "--id", type=int, required=True, help="ID of the user to view.")

    change = _leaf(
        commands,
        "change",
        "Change a user.",
        lambda ns: UserChange(id=ns.id, email=ns.email, password=ns.pwd),
        parent,
    )
    change.add_argument("-i", "--id", type=int, required=True, help="ID of the user to change.")
    change.add_argument("-e", "--email", help="New email. Can be skipped.")
    change.add_argument("-p", "--pwd", help="New password. Can be skipped.")

    keys = commands.add_parser(
        "keys",
        help="User's keys management.",
        description="User's keys management.",
        parents=[parent],
    )
    _add_key_commands(keys.add_subparsers(dest="keys_command", metavar="COMMAND", required=True), parent)


def _add_key_commands(commands: argparse._SubParsersAction, parent: argparse.ArgumentParser) -> None:
    generate = _leaf(
        commands,
        "generate",
        "Generate a new key for a user.",
        lambda ns: KeyGenerate(id=ns.id),
        parent,
    )
    generate.add_argument("-i", "--id", type=int, required=True, help="ID of the user to add a key to.")

    view = _leaf(
        commands,
        "view",
        "View key(s).",
        lambda ns: KeyView(id=ns.id, nmb=ns.nmb),
        parent,
    )
    view.add_argument("-i", "--id", type=int, required=True, help="ID of the user whose keys to view.")
    view.add_argument(
        "-n",
        "--nmb",
        type=_non_negative_int,
        help="Number of the key to view. All keys are shown when omitted.",
    )

    revoke = _leaf(
        commands,
        "revoke",
        "Revoke and delete a key.",
        lambda ns: KeyRevoke(id=ns.id, nmb=ns.nmb),
        parent,
    )
    revoke.add_argument("-i", "--id", type=int, required=True, help="ID of the user owning the key.")
    revoke.add_argument("-n", "--nmb", type=_non_negative_int, required=True, help="Number of the key to delete.")


# ---------------------------------------------------------------------------
# cache …
# ---------------------------------------------------------------------------

def _add_cache_commands(root: argparse._SubParsersAction, parent: argparse.ArgumentParser) -> None:
    cache = root.add_parser("cache", help="Manipulate caches.", description="Manipulate caches.", parents=[parent])
    commands = cache.add_subparsers(dest="cache_command", metavar="COMMAND", required=True)

    create = _leaf(
        commands,
        "create",
        "Create a cache.",
        lambda ns: CacheCreate(lat=ns.lat, long=ns.long, descrip=ns.descrip, hint=ns.hint),
        parent,
    )
    create.add_argument("--lat", type=float, required=True, help="Latitude.")
    create.add_argument("--long", type=float, required=True, help="Longitude.")
    create.add_argument("--descrip", required=True, help="Description.")
    create.add_argument("--hint", required=True, help="Hint for finders.")

    find = _leaf(
        commands,
        "find",
        "Find caches by owner and/or bounds.",
        lambda ns: CacheFind(
            user=ns.user,
            min_lat=ns.min_lat,
            max_lat=ns.max_lat,
            min_long=ns.min_long,
            max_long=ns.max_long,
        ),
        parent,
    )
    find.add_argument("--user", type=int, help="Filter by owner user ID.")
    find.add_argument("--min-lat", type=float, help="Part of the bounding box.")
    find.add_argument("--max-lat", type=float, help="Part of the bounding box.")
    find.add_argument("--min-long", type=float, help="Part of the bounding box.")
    find.add_argument("--max-long", type=float, help="Part of the bounding box.")

    view = _leaf(commands, "view", "View a cache.", lambda ns: CacheView(id=ns.id), parent)
    view.add_argument("-i", "--id", type=int, required=True, help="ID of the cache.")

    change = _leaf(
        commands,
        "change",
        "Change cache values.",
        lambda ns: CacheChange(
            id=ns.id,
            lat=ns.lat,
            long=ns.long,
            descrip=ns.descrip,
            hint=ns.hint,
        ),
        parent,
    )
    change.add_argument("-i", "--id", type=int, required=True, help="ID of the cache.")
    change.add_argument("--lat", type=float, help="New latitude.")
    change.add_argument("--long", type=float, help="New longitude.")
    change.add_argument("--descrip", help="New description.")
    change.add_argument("--hint", help="New hint.")

    delete = _leaf(commands, "delete", "Delete a cache.", lambda ns: CacheDelete(id=ns.id), parent)
    delete.add_argument("-i", "--id", type=int, required=True, help="ID of the cache.")


# ---------------------------------------------------------------------------
# Root parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parent = _global_flags()
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Command-line client for the geocaching REST API.",
        parents=[parent],
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    root = parser.add_subparsers(dest="group", metavar="COMMAND")
    _add_user_commands(root, parent)
    _add_cache_commands(root, parent)
    doctor = root.add_parser(
        DOCTOR,
        help="Check the environment and server reachability.",
        parents=[parent],
    )
    doctor.set_defaults(build=None)
    return parser


def parse_invocation(
    argv: list[str] | None = None,
    *,
    parser: argparse.ArgumentParser | None = None,
) -> Invocation:
    """Parse *argv* into an :class:`Invocation`.

    Raises
    ------
    SystemExit
        On ``--help``, ``--version`` or a usage error (argparse behaviour).
    """
    parser = parser or build_parser()
    namespace = parser.parse_args(argv)

    options = GlobalOptions(
        api_key=getattr(namespace, "api", None),
        ip=getattr(namespace, "ip", None),
        port=getattr(namespace, "port", None),
        verbose=getattr(namespace, "verbose", False),
    )

    if namespace.group is None:
        return Invocation(options=options, target=None)
    if namespace.group == DOCTOR:
        return Invocation(options=options, target=DOCTOR)

    build: _Builder = namespace.build
    return Invocation(options=options, target=build(namespace))
