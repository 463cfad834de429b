"""Tests for ClientSettings (config.py).

The autouse fixture in ``conftest`` clears ``GEOCACHE_*`` variables and
runs every test in an empty temporary directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from geocache_cli.config import ClientSettings
from geocache_cli.core.commands import GlobalOptions


class TestDefaults:
    def test_defaults(self) -> None:
        settings = ClientSettings()
        assert settings.ip == "127.0.0.1"
        assert settings.port == 8000
        assert settings.api_key is None
        assert settings.connect_timeout_seconds == 5.0
        assert settings.read_timeout_seconds is None
        assert settings.verbose is False

    def test_base_url(self) -> None:
        assert ClientSettings().base_url == "http://127.0.0.1:8000/api/v1"

    def test_user_agent_names_the_client(self) -> None:
        assert ClientSettings().user_agent.startswith("geocache-cli/")


class TestEnvironment:
    def test_env_vars_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCACHE_IP", "192.168.1.20")
        monkeypatch.setenv("GEOCACHE_PORT", "8080")
        monkeypatch.setenv("GEOCACHE_API_KEY", "from-env")
        settings = ClientSettings()
        assert settings.base_url == "http://192.168.1.20:8080/api/v1"
        assert settings.api_key == "from-env"

    def test_dotenv_file_is_read(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("GEOCACHE_PORT=9999\n", encoding="utf-8")
        assert ClientSettings().port == 9999

    def test_invalid_port_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCACHE_PORT", "0")
        with pytest.raises(ValidationError):
            ClientSettings()

    def test_non_positive_timeout_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClientSettings(connect_timeout_seconds=0)


class TestOverrides:
    def test_no_flags_keeps_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCACHE_API_KEY", "from-env")
        settings = ClientSettings().with_overrides(GlobalOptions())
        assert settings.api_key == "from-env"
        assert settings.port == 8000

    def test_flags_win_over_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCACHE_API_KEY", "from-env")
        monkeypatch.setenv("GEOCACHE_IP", "10.0.0.1")
        settings = ClientSettings().with_overrides(
            GlobalOptions(api_key="from-flag", ip="10.0.0.9", port=1234, verbose=True),
        )
        assert settings.api_key == "from-flag"
        assert settings.base_url == "http://10.0.0.9:1234/api/v1"
        assert settings.verbose is True

    def test_overrides_return_a_copy(self) -> None:
        original = ClientSettings()
        original.with_overrides(GlobalOptions(port=1))
        assert original.port == 8000

    def test_verbose_flag_cannot_switch_env_verbose_off(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCACHE_VERBOSE", "true")
        assert ClientSettings().with_overrides(GlobalOptions()).verbose is True


class TestLoadSettings:
    def test_invalid_environment_becomes_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from geocache_cli.cli.app import _load_settings
        from geocache_cli.exceptions import ConfigurationError

        monkeypatch.setenv("GEOCACHE_PORT", "not-a-port")
        with pytest.raises(ConfigurationError) as exc_info:
            _load_settings(GlobalOptions())
        assert exc_info.value.hint is not None
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_invalid_environment_aborts_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from geocache_cli.cli.app import main
        from geocache_cli.exceptions import ConfigurationError

        monkeypatch.setenv("GEOCACHE_CONNECT_TIMEOUT_SECONDS", "-1")
        with pytest.raises(ConfigurationError):
            main(["cache", "view", "-i", "1"])
