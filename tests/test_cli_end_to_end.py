"""End-to-end tests: argv in, HTTP request out, stdout lines back.

``main`` accepts an ``http_transport`` so a ``httpx.MockTransport`` can
play the server.  Nothing here opens a socket.
"""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from geocache_cli.cli import exit_codes
from geocache_cli.cli.app import main
from geocache_cli.exceptions import ApplicationError, InvalidResponseBodyError, TransportError


class _Server:
    """Fake API answering every request with one canned payload."""

    def __init__(self, payload: object, *, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _run(server: _Server, *argv: str) -> int:
    return main(list(argv), http_transport=server.transport)


def _stdout_lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


# ---------------------------------------------------------------------------
# user …
# ---------------------------------------------------------------------------

class TestUser:
    def test_create(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False, "api_key": "K-1"})
        code = _run(server, "user", "create", "-n", "alice", "-e", "a@x.org", "-p", "pw")

        assert code == exit_codes.SUCCESS
        assert server.last.method == "POST"
        assert server.last.url.path == "/api/v1/user/"
        assert json.loads(server.last.content) == {"login": "alice", "email": "a@x.org", "password": "pw"}
        assert _stdout_lines(capsys) == ["User created", "Use your default API key: K-1"]

    def test_change_sends_only_given_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False})
        _run(server, "user", "change", "-i", "4", "-e", "new@x.org")

        assert server.last.method == "PUT"
        assert server.last.url.path == "/api/v1/user/4"
        assert json.loads(server.last.content) == {"email": "new@x.org"}
        assert _stdout_lines(capsys) == ["User changed"]

    def test_api_key_flag_sets_header(self) -> None:
        server = _Server({"error": False, "id": 1, "name": "a"})
        _run(server, "--api", "secret", "user", "view", "-i", "1")
        assert server.last.headers["x-api-key"] == "secret"

    def test_api_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEOCACHE_API_KEY", "env-key")
        server = _Server({"error": False, "id": 1})
        _run(server, "user", "view", "-i", "1")
        assert server.last.headers["x-api-key"] == "env-key"


# ---------------------------------------------------------------------------
# user keys …
# ---------------------------------------------------------------------------

class TestKeys:
    def test_view_all(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({
            "error": False,
            "keys": [{"nmb": 0, "api_key": "k0"}, {"nmb": 1, "api_key": "k1"}],
        })
        _run(server, "user", "keys", "view", "-i", "3")

        assert server.last.method == "GET"
        assert server.last.url.path == "/api/v1/user/3/keys"
        assert _stdout_lines(capsys) == ["Keys found", "Key #0: k0", "Key #1: k1"]

    def test_view_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False, "key": "k2"})
        _run(server, "user", "keys", "view", "-i", "3", "--nmb", "2")

        assert server.last.url.path == "/api/v1/user/3/keys/2"
        assert _stdout_lines(capsys) == ["Key found", "API key: k2"]

    def test_revoke(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False})
        _run(server, "user", "keys", "revoke", "-i", "3", "-n", "1")

        assert server.last.method == "DELETE"
        assert server.last.url.path == "/api/v1/user/3/keys/1"
        assert _stdout_lines(capsys) == ["Key deleted"]


# ---------------------------------------------------------------------------
# cache …
# ---------------------------------------------------------------------------

class TestCache:
    def test_create(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"id": 7, "error": False})
        code = _run(server, "cache", "create", "--lat", "1.0", "--long", "2.0", "--descrip", "d", "--hint", "h")

        assert code == exit_codes.SUCCESS
        assert server.last.method == "POST"
        assert server.last.url.path == "/api/v1/cache/"
        assert json.loads(server.last.content) == {"lat": 1.0, "long": 2.0, "descrip": "d", "hint": "h"}

        lines = _stdout_lines(capsys)
        assert lines == ["Cache created:", "    id: 7"]
        assert not any("error" in line for line in lines)

    def test_find_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False, "caches": []})
        _run(server, "cache", "find")

        assert server.last.url.query == b""
        assert _stdout_lines(capsys) == ["Cache find result:", "    No caches"]

    def test_find_with_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False, "caches": [{"id": 2, "hint": "tree"}]})
        _run(server, "cache", "find", "--user", "5", "--min-lat", "10")

        params = server.last.url.params
        assert params["user_id"] == "5"
        assert params["min_lat"] == "10.0"
        assert _stdout_lines(capsys) == ["Cache find result:", "Cache 2", "    id: 2", '    hint: "tree"']

    def test_delete(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False})
        _run(server, "cache", "delete", "-i", "9")

        assert server.last.method == "DELETE"
        assert server.last.url.path == "/api/v1/cache/9"
        assert _stdout_lines(capsys) == ["Cache deleted"]


# ---------------------------------------------------------------------------
# Cross-cutting behaviour
# ---------------------------------------------------------------------------

class TestValidationFlow:
    def test_server_error_is_printed_and_raised(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": True, "msg": "not allowed"}, status_code=403)

        with pytest.raises(ApplicationError) as exc_info:
            _run(server, "cache", "delete", "-i", "9")

        assert exc_info.value.payload == {"msg": "not allowed"}
        lines = _stdout_lines(capsys)
        assert lines == ["Server returned an error!", '    msg: "not allowed"']
        assert "Cache deleted" not in lines

    def test_verbose_echoes_response_first(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False})
        _run(server, "--verbose", "cache", "delete", "-i", "9")

        lines = _stdout_lines(capsys)
        assert lines[0] == "Server response:"
        assert json.loads("\n".join(lines[1:-1])) == {"error": False}
        assert lines[-1] == "Cache deleted"

    def test_invalid_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, content=b"<html>bad gateway</html>")

        with pytest.raises(InvalidResponseBodyError):
            main(["cache", "view", "-i", "1"], http_transport=httpx.MockTransport(handler))

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: httpx.ConnectError("connection refused"),
            lambda: httpx.ReadTimeout("too slow"),
        ],
    )
    def test_network_failure_is_transport_error(
        self,
        factory: Callable[[], Exception],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise factory()

        with pytest.raises(TransportError):
            main(["user", "view", "-i", "1"], http_transport=httpx.MockTransport(handler))
        assert capsys.readouterr().out == ""

    def test_custom_ip_and_port(self) -> None:
        server = _Server({"error": False})
        _run(server, "--ip", "10.0.0.7", "--port", "9001", "cache", "delete", "-i", "1")
        assert str(server.last.url) == "http://10.0.0.7:9001/api/v1/cache/1"


class TestVerboseLogging:
    @pytest.mark.parametrize(
        "argv",
        [
            ["user", "create", "-n", "alice", "-e", "a@x.org", "-p", "S3CRET-pw"],
            ["user", "change", "-i", "4", "-p", "S3CRET-pw"],
        ],
    )
    def test_password_never_reaches_the_log(
        self,
        argv: list[str],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        server = _Server({"error": False, "api_key": "K-1"})
        _run(server, "--verbose", *argv)

        captured = capsys.readouterr()
        assert "Dispatching" in captured.err
        assert "S3CRET-pw" not in captured.err
        assert "S3CRET-pw" not in captured.out
        assert json.loads(server.last.content)["password"] == "S3CRET-pw"

    def test_status_is_logged_once(self, capsys: pytest.CaptureFixture[str]) -> None:
        server = _Server({"error": False})
        _run(server, "--verbose", "cache", "delete", "-i", "9")

        assert capsys.readouterr().err.count("HTTP 200") == 1
