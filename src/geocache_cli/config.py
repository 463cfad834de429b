"""Client configuration.

Values come from environment variables (prefix ``GEOCACHE_``) or a local
``.env`` file; command-line flags override them through
:meth:`ClientSettings.with_overrides`.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from geocache_cli.core.commands import GlobalOptions
from geocache_cli.version import __version__

API_PREFIX: str = "/api/v1"


class ClientSettings(BaseSettings):
    """Connection settings for one CLI invocation."""

    model_config = SettingsConfigDict(
        env_prefix="GEOCACHE_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key sent as the x-api-key header on every request.",
    )
    ip: str = Field(
        default="127.0.0.1",
        min_length=1,
        description="API server IP address or host name.",
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="API server port.",
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Connect timeout (seconds).",
    )
    read_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Read/write timeout (seconds); unlimited when unset.",
    )
    verbose: bool = Field(
        default=False,
        description="Print raw server responses.",
    )

    @property
    def base_url(self) -> str:
        return f"http://{self.ip}:{self.port}{API_PREFIX}"

    @property
    def user_agent(self) -> str:
        return f"geocache-cli/{__version__}"

    def with_overrides(self, options: GlobalOptions) -> ClientSettings:
        """Return a copy where every flag given on the command line wins."""
        update: dict[str, object] = {}
        if options.api_key is not None:
            update["api_key"] = options.api_key
        if options.ip is not None:
            update["ip"] = options.ip
        if options.port is not None:
            update["port"] = options.port
        if options.verbose:
            update["verbose"] = True
        return self.model_copy(update=update)
