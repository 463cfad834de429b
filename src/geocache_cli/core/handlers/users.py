"""Handlers for ``user create | view | change``."""

from __future__ import annotations

from geocache_cli.core.commands import UserChange, UserCreate, UserView
from geocache_cli.core.models import ApiRequest, sparse
from geocache_cli.core.render import field_lines_without_error
from geocache_cli.core.schemas import UserCreated, parse
from geocache_cli.core.session import Session


# ---------------------------------------------------------------------------
# Request builders (pure)
# ---------------------------------------------------------------------------

def build_user_create_request(command: UserCreate) -> ApiRequest:
    return ApiRequest(
        "POST",
        "/user/",
        body={
            "login": command.name,
            "email": command.email,
            "password": command.password,
        },
    )


def build_user_view_request(command: UserView) -> ApiRequest:
    return ApiRequest("GET", f"/user/{command.id}")


def build_user_change_request(command: UserChange) -> ApiRequest:
    """Only the fields actually given are sent; the server keeps the rest."""
    return ApiRequest(
        "PUT",
        f"/user/{command.id}",
        body=sparse(email=command.email, password=command.password),
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def handle_user_create(command: UserCreate, session: Session) -> None:
    response = session.exchange(build_user_create_request(command))
    created = parse(UserCreated, response)
    session.emit("User created", f"Use your default API key: {created.api_key}")


def handle_user_view(command: UserView, session: Session) -> None:
    response = session.exchange(build_user_view_request(command))
    session.emit("User found")
    session.emit_all(field_lines_without_error(response))


def handle_user_change(command: UserChange, session: Session) -> None:
    session.exchange(build_user_change_request(command))
    session.emit("User changed")
