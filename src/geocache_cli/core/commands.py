"""Command model — the typed result of argument parsing.

Every leaf is a **frozen** dataclass carrying the parameters of exactly
one operation.  The two-level command tree (``user …`` / ``user keys …``
/ ``cache …``) is expressed through union aliases rather than wrapper
objects, so the dispatcher can match on the leaf type directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Flags accepted by every subcommand.

    ``None`` means "not given on the command line" so that the
    configuration layer can fall back to environment values.
    """

    api_key: str | None = None
    ip: str | None = None
    port: int | None = None
    verbose: bool = False


# ---------------------------------------------------------------------------
# user …
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UserCreate:
    """Create a new account."""

    name: str
    """Displayed login name."""

    email: str
    """Account email; the server requires it to be unique."""

    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class UserView:
    """View one account."""

    id: int


@dataclass(frozen=True, slots=True)
class UserChange:
    """Change the email and/or password of an account."""

    id: int
    email: str | None = None
    password: str | None = field(default=None, repr=False)


# ---------------------------------------------------------------------------
# user keys …
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class KeyGenerate:
    """Issue an additional API key for a user."""

    id: int


@dataclass(frozen=True, slots=True)
class KeyView:
    """View one key (``nmb`` given) or all keys of a user."""

    id: int
    nmb: int | None = None


@dataclass(frozen=True, slots=True)
class KeyRevoke:
    """Revoke and delete key number ``nmb``."""

    id: int
    nmb: int


# ---------------------------------------------------------------------------
# cache …
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CacheCreate:
    """Create a cache at the given coordinates."""

    lat: float
    long: float
    descrip: str
    hint: str


@dataclass(frozen=True, slots=True)
class CacheFind:
    """Find caches by owner and/or a bounding box.  All filters are optional."""

    user: int | None = None
    min_lat: float | None = None
    max_lat: float | None = None
    min_long: float | None = None
    max_long: float | None = None


@dataclass(frozen=True, slots=True)
class CacheView:
    """View one cache."""

    id: int


@dataclass(frozen=True, slots=True)
class CacheChange:
    """Change any subset of a cache's values."""

    id: int
    lat: float | None = None
    long: float | None = None
    descrip: str | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CacheDelete:
    """Delete one cache."""

    id: int


# ---------------------------------------------------------------------------
# Command tree
# ---------------------------------------------------------------------------

KeysCommand: TypeAlias = KeyGenerate | KeyView | KeyRevoke
UserCommand: TypeAlias = UserCreate | UserView | UserChange | KeysCommand
CacheCommand: TypeAlias = CacheCreate | CacheFind | CacheView | CacheChange | CacheDelete
Command: TypeAlias = UserCommand | CacheCommand

ALL_COMMAND_TYPES: tuple[type, ...] = (
    UserCreate,
    UserView,
    UserChange,
    KeyGenerate,
    KeyView,
    KeyRevoke,
    CacheCreate,
    CacheFind,
    CacheView,
    CacheChange,
    CacheDelete,
)
"""Every leaf variant, in the order the CLI lists them."""
