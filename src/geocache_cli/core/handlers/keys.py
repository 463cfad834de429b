"""Handlers for ``user keys generate | view | revoke``."""

from __future__ import annotations

from geocache_cli.core.commands import KeyGenerate, KeyRevoke, KeyView
from geocache_cli.core.models import ApiRequest
from geocache_cli.core.schemas import KeyIssued, KeyList, parse
from geocache_cli.core.session import Session


def _keys_path(user_id: int, nmb: int | None = None) -> str:
    path = f"/user/{user_id}/keys"
    if nmb is not None:
        path = f"{path}/{nmb}"
    return path


# ---------------------------------------------------------------------------
# Request builders (pure)
# ---------------------------------------------------------------------------

def build_key_generate_request(command: KeyGenerate) -> ApiRequest:
    return ApiRequest("POST", _keys_path(command.id))


def build_key_view_request(command: KeyView) -> ApiRequest:
    """Collection endpoint without ``nmb``, single-key endpoint with it."""
    return ApiRequest("GET", _keys_path(command.id, command.nmb))


def build_key_revoke_request(command: KeyRevoke) -> ApiRequest:
    return ApiRequest("DELETE", _keys_path(command.id, command.nmb))


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def handle_key_generate(command: KeyGenerate, session: Session) -> None:
    response = session.exchange(build_key_generate_request(command))
    issued = parse(KeyIssued, response)
    session.emit("Key created", f"Use your new API key: {issued.key}")


def handle_key_view(command: KeyView, session: Session) -> None:
    response = session.exchange(build_key_view_request(command))

    if command.nmb is not None:
        single = parse(KeyIssued, response)
        session.emit("Key found", f"API key: {single.key}")
        return

    listing = parse(KeyList, response)
    session.emit("Keys found")
    session.emit_all(f"Key #{entry.nmb}: {entry.api_key}" for entry in listing.keys)


def handle_key_revoke(command: KeyRevoke, session: Session) -> None:
    session.exchange(build_key_revoke_request(command))
    session.emit("Key deleted")
