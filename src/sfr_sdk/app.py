"""Typer application and CLI entry point for sfr-sdk.

The ``sfr-sdk`` command is a small operator tool on top of the SDK:

* ``sfr-sdk health`` probes ``GET /health`` of the learning or crypto API.
* ``sfr-sdk config`` prints the effective client configuration after
  presets, ``./sfr-sdk.json``, ``SFR_*`` environment variables and flags
  have been merged.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. :class:`~sfr_sdk.exceptions.SfrError` failures exit
with the error's ``exit_code``; anything else writes a crash log under the
data directory.
"""

from __future__ import annotations

import asyncio
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, NoReturn, Optional

import typer

from sfr_sdk import __version__
from sfr_sdk.client.executor import RequestExecutor
from sfr_sdk.config import DEVELOPMENT, LEARNING, resolve_config, resolve_credential
from sfr_sdk.exceptions import SfrError
from sfr_sdk.exit_codes import EXIT_GENERIC_FAILURE
from sfr_sdk.models import ClientConfig, HealthStatus
from sfr_sdk.output import OutputFormat, OutputManager, error, format_response, set_output, success

app = typer.Typer(
    name="sfr-sdk",
    help="Operator tools for the SFR learning and token APIs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_API_HELP = "API to target: learning or crypto."
_ENV_HELP = "Preset to start from: development or production."


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"sfr-sdk {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Initialise the global :class:`~sfr_sdk.output.OutputManager` from CLI flags."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


def _fail(exc: SfrError) -> NoReturn:
    error(exc.message)
    raise typer.Exit(code=exc.exit_code)


def _build_executor(config: ClientConfig) -> RequestExecutor:
    return RequestExecutor(config)


async def _probe(config: ClientConfig, token: Optional[str]) -> HealthStatus:
    async with _build_executor(config) as executor:
        if token:
            executor.set_access_token(token)
        return await executor.health_check()


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return secret
    if len(secret) <= 4:
        return "****"
    return f"{secret[:2]}****{secret[-2:]}"


@app.command("health")
def health_command(
    api: str = typer.Option(LEARNING, "--api", help=_API_HELP),
    env: str = typer.Option(DEVELOPMENT, "--env", help=_ENV_HELP),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the base URL."),
    token_source: Optional[str] = typer.Option(
        None,
        "--token-source",
        help="Bearer token source: env:VAR or file:/path.",
    ),
) -> None:
    """Probe the API's ``/health`` endpoint.

    Prints ``{status, timestamp}`` on success. Exits with code 8 when the
    probe fails.

    Example::

        sfr-sdk health --api crypto --env production --token-source env:SFR_TOKEN
    """
    try:
        config = resolve_config(api, env, base_url=base_url)
        token = resolve_credential(token_source) if token_source else None
        status = asyncio.run(_probe(config, token))
    except SfrError as exc:
        _fail(exc)

    success(f"{config.base_url} is healthy")
    format_response(status.model_dump(mode="json"))


@app.command("config")
def config_command(
    api: str = typer.Option(LEARNING, "--api", help=_API_HELP),
    env: str = typer.Option(DEVELOPMENT, "--env", help=_ENV_HELP),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the base URL."),
) -> None:
    """Show the resolved client configuration with the API key masked.

    Example::

        sfr-sdk --json config --env production
    """
    try:
        config = resolve_config(api, env, base_url=base_url)
    except SfrError as exc:
        _fail(exc)

    data = config.model_dump(mode="json")
    data["api_key"] = _mask(config.api_key)
    format_response(data)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from sfr_sdk.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``sfr-sdk`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except SfrError as exc:
        error(exc.message)
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
