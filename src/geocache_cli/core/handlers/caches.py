"""Handlers for ``cache create | find | view | change | delete``."""

from __future__ import annotations

from geocache_cli.core.commands import (
    CacheChange,
    CacheCreate,
    CacheDelete,
    CacheFind,
    CacheView,
)
from geocache_cli.core.models import ApiRequest, sparse
from geocache_cli.core.render import INDENT, field_lines, field_lines_without_error
from geocache_cli.core.schemas import CacheDetail, CacheList, CacheRecord, parse
from geocache_cli.core.session import Session


# ---------------------------------------------------------------------------
# Request builders (pure)
# ---------------------------------------------------------------------------

def build_cache_create_request(command: CacheCreate) -> ApiRequest:
    return ApiRequest(
        "POST",
        "/cache/",
        body={
            "lat": command.lat,
            "long": command.long,
            "descrip": command.descrip,
            "hint": command.hint,
        },
    )


def build_cache_find_request(command: CacheFind) -> ApiRequest:
    """Filters travel as query parameters; the owner filter is ``user_id`` on the wire."""
    return ApiRequest(
        "GET",
        "/cache/",
        query=sparse(
            user_id=command.user,
            min_lat=command.min_lat,
            max_lat=command.max_lat,
            min_long=command.min_long,
            max_long=command.max_long,
        ),
    )


def build_cache_view_request(command: CacheView) -> ApiRequest:
    return ApiRequest("GET", f"/cache/{command.id}")


def build_cache_change_request(command: CacheChange) -> ApiRequest:
    return ApiRequest(
        "PUT",
        f"/cache/{command.id}",
        body=sparse(
            lat=command.lat,
            long=command.long,
            descrip=command.descrip,
            hint=command.hint,
        ),
    )


def build_cache_delete_request(command: CacheDelete) -> ApiRequest:
    return ApiRequest("DELETE", f"/cache/{command.id}")


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def handle_cache_create(command: CacheCreate, session: Session) -> None:
    response = session.exchange(build_cache_create_request(command))
    session.emit("Cache created:")
    session.emit_all(field_lines_without_error(response))


def handle_cache_find(command: CacheFind, session: Session) -> None:
    response = session.exchange(build_cache_find_request(command))
    result = parse(CacheList, response)

    # Validate every record before printing anything.
    records = [(parse(CacheRecord, raw).id, raw) for raw in result.caches]

    session.emit("Cache find result:")
    if not records:
        session.emit(f"{INDENT}No caches")
        return

    for cache_id, raw in records:
        session.emit(f"Cache {cache_id}")
        session.emit_all(field_lines(raw))


def handle_cache_view(command: CacheView, session: Session) -> None:
    response = session.exchange(build_cache_view_request(command))
    detail = parse(CacheDetail, response)
    session.emit("Cache view:")
    session.emit_all(field_lines(detail.caches))


def handle_cache_change(command: CacheChange, session: Session) -> None:
    session.exchange(build_cache_change_request(command))
    session.emit("Cache edited")


def handle_cache_delete(command: CacheDelete, session: Session) -> None:
    session.exchange(build_cache_delete_request(command))
    session.emit("Cache deleted")
