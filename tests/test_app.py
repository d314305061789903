"""Tests for the ``sfr-sdk`` command line."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from sfr_sdk import __version__
from sfr_sdk import app as app_module
from sfr_sdk.app import _mask, app, main
from sfr_sdk.client.executor import RequestExecutor
from sfr_sdk.config import CRYPTO_PROD_URL, LEARNING_DEV_URL
from sfr_sdk.exceptions import NotFoundError
from sfr_sdk.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_HEALTH_CHECK_FAILED,
    EXIT_NOT_FOUND,
)
from sfr_sdk.models import ClientConfig


async def _no_sleep(seconds: float) -> None:
    return None


def _patch_executor(monkeypatch: pytest.MonkeyPatch, handler) -> list[httpx.Request]:
    """Route the CLI's executor through a mock transport; return the request log."""
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    def _build(config: ClientConfig) -> RequestExecutor:
        return RequestExecutor(config, transport=httpx.MockTransport(_record), sleep=_no_sleep)

    monkeypatch.setattr(app_module, "_build_executor", _build)
    return seen


class TestVersion:
    def test_version_flag(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"sfr-sdk {__version__}" in result.output


class TestMask:
    @pytest.mark.parametrize(
        "secret, expected",
        [(None, None), ("", ""), ("abcd", "****"), ("secret-key", "se****ey")],
    )
    def test_mask(self, secret, expected) -> None:
        assert _mask(secret) == expected


class TestConfigCommand:
    def test_defaults(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--json", "config"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["base_url"] == LEARNING_DEV_URL
        assert data["debug"] is True
        assert data["api_key"] is None

    def test_masks_api_key_from_env(
        self, isolated_config: Path, cli_runner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SFR_API_KEY", "secret-key")
        result = cli_runner.invoke(app, ["--json", "config", "--api", "crypto", "--env", "production"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["api_key"] == "se****ey"
        assert data["base_url"] == CRYPTO_PROD_URL
        assert "secret-key" not in result.output

    def test_project_file_and_flag(self, isolated_config: Path, cli_runner) -> None:
        (isolated_config / "sfr-sdk.json").write_text('{"timeout": 3000}', encoding="utf-8")
        result = cli_runner.invoke(app, ["--json", "config", "--base-url", "http://lms.test/api/"])
        data = json.loads(result.stdout)
        assert data["timeout"] == 3000
        assert data["base_url"] == "http://lms.test/api"

    def test_plain_output(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--plain", "config"])
        assert result.exit_code == 0
        assert f"base_url\t{LEARNING_DEV_URL}" in result.stdout

    def test_unknown_preset(self, isolated_config: Path, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "--env", "staging"])
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "Unknown preset" in result.output

    def test_bad_env_value(
        self, isolated_config: Path, cli_runner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SFR_TIMEOUT", "soon")
        result = cli_runner.invoke(app, ["--no-color", "config"])
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "SFR_TIMEOUT" in result.output


class TestHealthCommand:
    def test_healthy(self, isolated_config: Path, cli_runner, monkeypatch: pytest.MonkeyPatch) -> None:
        seen = _patch_executor(
            monkeypatch,
            lambda request: httpx.Response(200, json={"status": "UP", "timestamp": "2025-08-20T10:00:00Z"}),
        )
        monkeypatch.setenv("SFR_TOKEN", "jwt-cli")

        result = cli_runner.invoke(
            app,
            ["--json", "-q", "health", "--env", "production", "--token-source", "env:SFR_TOKEN"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"status": "UP", "timestamp": "2025-08-20T10:00:00Z"}
        assert seen[0].url.path == "/api/learning/health"
        assert seen[0].headers["authorization"] == "Bearer jwt-cli"

    def test_success_message(self, isolated_config: Path, cli_runner, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_executor(
            monkeypatch,
            lambda request: httpx.Response(200, json={"status": "UP", "timestamp": "t"}),
        )
        result = cli_runner.invoke(app, ["--no-color", "health", "--env", "production"])
        assert result.exit_code == 0
        assert "is healthy" in result.output

    def test_server_error_exits_with_health_code(
        self, isolated_config: Path, cli_runner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen = _patch_executor(monkeypatch, lambda request: httpx.Response(500))
        result = cli_runner.invoke(app, ["--no-color", "health", "--api", "crypto", "--env", "production"])
        assert result.exit_code == EXIT_HEALTH_CHECK_FAILED
        assert "API health check failed" in result.output
        # production preset retries three times
        assert len(seen) == 4

    def test_missing_token_source(
        self, isolated_config: Path, cli_runner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen = _patch_executor(monkeypatch, lambda request: httpx.Response(200))
        monkeypatch.delenv("SFR_TOKEN", raising=False)
        result = cli_runner.invoke(app, ["--no-color", "health", "--token-source", "env:SFR_TOKEN"])
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "SFR_TOKEN" in result.output
        assert seen == []


class TestMain:
    @pytest.fixture(autouse=True)
    def _no_signal_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)

    def test_sfr_error_exit_code(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        def _raise() -> None:
            raise NotFoundError("space 9 not found", status=404)

        monkeypatch.setattr(app_module, "app", _raise)
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == EXIT_NOT_FOUND
        assert "space 9 not found" in capsys.readouterr().err

    def test_unexpected_error_writes_crash_log(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        def _raise() -> None:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "app", _raise)
        monkeypatch.setattr("sfr_sdk.config._is_xdg_platform", lambda: True)

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == EXIT_GENERIC_FAILURE
        logs = list((isolated_config / "data" / "sfr-sdk" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "RuntimeError: kaboom" in logs[0].read_text()
        assert "Debug log:" in capsys.readouterr().err

    def test_system_exit_passes_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _exit() -> None:
            raise SystemExit(0)

        monkeypatch.setattr(app_module, "app", _exit)
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 0
