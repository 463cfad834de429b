"""Command dispatch — routes a parsed command to exactly one handler.

The command set is closed and known up front, so dispatch is a single
structural ``match`` on the command type.  The wildcard branch is the
safety net for a parser that produced a shape no handler covers; it can
only fire when the command model and this table drift apart.
"""

from __future__ import annotations

import logging

from geocache_cli.core.commands import (
    CacheChange,
    CacheCreate,
    CacheDelete,
    CacheFind,
    CacheView,
    Command,
    KeyGenerate,
    KeyRevoke,
    KeyView,
    UserChange,
    UserCreate,
    UserView,
)
from geocache_cli.core.handlers import (
    handle_cache_change,
    handle_cache_create,
    handle_cache_delete,
    handle_cache_find,
    handle_cache_view,
    handle_key_generate,
    handle_key_revoke,
    handle_key_view,
    handle_user_change,
    handle_user_create,
    handle_user_view,
)
from geocache_cli.core.session import Session
from geocache_cli.exceptions import InternalDispatchError

logger = logging.getLogger(__name__)


def dispatch(command: Command, session: Session) -> None:
    """Run the handler for *command*.

    Returns normally on success.  Any failure is raised as a
    :class:`~geocache_cli.exceptions.GeocacheError` subclass; nothing is
    retried.

    Raises
    ------
    InternalDispatchError
        If *command* is not one of the known variants.
    """
    logger.debug("Dispatching %r", command)

    match command:
        # user
        case UserCreate():
            handle_user_create(command, session)
        case UserView():
            handle_user_view(command, session)
        case UserChange():
            handle_user_change(command, session)
        # user keys
        case KeyGenerate():
            handle_key_generate(command, session)
        case KeyView():
            handle_key_view(command, session)
        case KeyRevoke():
            handle_key_revoke(command, session)
        # cache
        case CacheCreate():
            handle_cache_create(command, session)
        case CacheFind():
            handle_cache_find(command, session)
        case CacheView():
            handle_cache_view(command, session)
        case CacheChange():
            handle_cache_change(command, session)
        case CacheDelete():
            handle_cache_delete(command, session)
        case _:
            raise InternalDispatchError(
                f"No handler available for command {type(command).__name__}.",
                hint="This is a bug in geocache-cli. Please report it.",
            )
