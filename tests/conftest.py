"""Shared test fixtures for sfr-sdk.

Provides isolated configuration environments, output state management,
a fake HTTP API and a CLI runner. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from sfr_sdk.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME at tmp_path, clears every SFR_* environment
    variable and changes the working directory to tmp_path so no
    ``sfr-sdk.json`` from the developer's checkout is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "SFR_BASE_URL",
        "SFR_API_KEY",
        "SFR_TIMEOUT",
        "SFR_RETRY_ATTEMPTS",
        "SFR_DEBUG",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Fake API fixture
# ---------------------------------------------------------------------------


class FakeApi:
    """Route table served through :class:`httpx.MockTransport`.

    Routes are keyed by method and the path below the API base
    (``/api/learning`` or ``/api/v1``). Unknown routes answer 404.
    """

    _BASE_PATHS = ("/api/learning", "/api/v1")

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json: object = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        for base in self._BASE_PATHS:
            if path.startswith(base):
                path = path[len(base):]
                break
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(
                404, json={"error": "NOT_FOUND", "message": f"no route {request.method} {path}"}
            )
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last.content)

    def last_params(self) -> dict[str, str]:
        return dict(self.last.url.params)


@pytest.fixture
def fake_api() -> FakeApi:
    """An empty :class:`FakeApi`; register routes with ``fake_api.add``."""
    return FakeApi()
