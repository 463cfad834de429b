"""Per-operation response schemas (Pydantic v2).

The server answers with loosely shaped JSON.  Each operation that reads
a specific field declares it here, so an absent or mistyped field
surfaces as :class:`~geocache_cli.exceptions.MissingFieldError` instead
of an unhandled ``KeyError`` deep inside a handler.

Extra fields are always allowed — only what the handler needs is checked.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from geocache_cli.exceptions import MissingFieldError


class _Response(BaseModel):
    model_config = ConfigDict(extra="allow")


class UserCreated(_Response):
    """Answer to ``POST /user/``."""

    api_key: str = Field(..., description="Default API key issued for the new user.")


class KeyIssued(_Response):
    """Answer to ``POST /user/{id}/keys`` and ``GET /user/{id}/keys/{nmb}``."""

    key: str


class KeyEntry(_Response):
    nmb: StrictInt
    api_key: str


class KeyList(_Response):
    """Answer to ``GET /user/{id}/keys``."""

    keys: list[KeyEntry]


class CacheRecord(_Response):
    """One element of a cache search result."""

    id: StrictInt


class CacheList(_Response):
    """Answer to ``GET /cache/``."""

    caches: list[dict[str, Any]]


class CacheDetail(_Response):
    """Answer to ``GET /cache/{id}``; the record is nested under ``caches``."""

    caches: Any = Field(...)


_ModelT = TypeVar("_ModelT", bound=BaseModel)


def parse(model: type[_ModelT], value: Any) -> _ModelT:
    """Validate *value* against *model*.

    Raises
    ------
    MissingFieldError
        If a required field is absent or has the wrong type.
    """
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) or "<root>" for err in exc.errors()})
        raise MissingFieldError(
            f"Server response is missing or has invalid field(s): {', '.join(fields)}",
            hint="Run with --verbose to see the raw server response.",
        ) from exc
