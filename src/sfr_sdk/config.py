"""Configuration resolution with presets, project file and environment overrides.

This module turns the many ways a caller can describe a connection into one
validated :class:`~sfr_sdk.models.ClientConfig`:

* **Presets** -- a ``development`` and a ``production`` preset per API
  (``learning`` and ``crypto``). See :func:`preset_config`.
* **Project file** -- ``./sfr-sdk.json`` holding any :class:`ClientConfig`
  field. See :func:`load_project_config`.
* **Environment** -- ``SFR_BASE_URL``, ``SFR_API_KEY``, ``SFR_TIMEOUT``,
  ``SFR_RETRY_ATTEMPTS`` and ``SFR_DEBUG``.
* **Precedence resolution** -- :func:`resolve_config` merges explicit
  arguments, environment variables, the project file and the preset.
* **Credential resolution** -- :func:`resolve_credential` reads a bearer
  token from an environment variable or a file.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from sfr_sdk.exceptions import ConfigError
from sfr_sdk.models import ClientConfig

_APP_NAME = "sfr-sdk"
_PROJECT_CONFIG_FILENAME = "sfr-sdk.json"

LEARNING = "learning"
CRYPTO = "crypto"
DEVELOPMENT = "development"
PRODUCTION = "production"

LEARNING_DEV_URL = "http://localhost:8080/api/learning"
LEARNING_PROD_URL = "https://api.sfr.tokyo/api/learning"
CRYPTO_DEV_URL = "http://localhost:8080/api/v1"
CRYPTO_PROD_URL = "https://api.sfr.tokyo/api/v1"

_PRESETS: dict[tuple[str, str], dict[str, Any]] = {
    (LEARNING, DEVELOPMENT): {"base_url": LEARNING_DEV_URL, "debug": True, "timeout": 15000},
    (LEARNING, PRODUCTION): {
        "base_url": LEARNING_PROD_URL,
        "debug": False,
        "timeout": 10000,
        "retry_attempts": 3,
    },
    (CRYPTO, DEVELOPMENT): {"base_url": CRYPTO_DEV_URL, "debug": True, "timeout": 15000},
    (CRYPTO, PRODUCTION): {
        "base_url": CRYPTO_PROD_URL,
        "debug": False,
        "timeout": 10000,
        "retry_attempts": 3,
    },
}

_ENV_VARS = {
    "base_url": "SFR_BASE_URL",
    "api_key": "SFR_API_KEY",
    "timeout": "SFR_TIMEOUT",
    "retry_attempts": "SFR_RETRY_ATTEMPTS",
    "debug": "SFR_DEBUG",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


# --- Data directory (crash logs) ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory spec (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory, creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/sfr-sdk/`` (default ``~/.local/share/sfr-sdk/``).
    Elsewhere: ``~/.sfr-sdk/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Presets ---


def preset_values(api: str, env: str) -> dict[str, Any]:
    """Return a copy of the raw preset values for *api* in *env*.

    Raises:
        ConfigError: If the API or environment name is unknown.
    """
    try:
        return dict(_PRESETS[(api, env)])
    except KeyError:
        raise ConfigError(
            f"Unknown preset '{api}/{env}' "
            f"(apis: {LEARNING}, {CRYPTO}; envs: {DEVELOPMENT}, {PRODUCTION})"
        ) from None


def preset_config(api: str, env: str, **overrides: Any) -> ClientConfig:
    """Build a :class:`ClientConfig` from a preset plus keyword overrides.

    ``None`` overrides are ignored so callers can forward optional arguments.
    """
    values = preset_values(api, env)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return _validate(values, source=f"preset {api}/{env}")


# --- Project-local config ---


def load_project_config(path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``./sfr-sdk.json`` (or *path*) as a dict.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or not a JSON object.
    """
    path = path or Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Environment ---


def load_env_overrides() -> dict[str, Any]:
    """Read the ``SFR_*`` environment variables that are set.

    Raises:
        ConfigError: If a numeric or boolean variable cannot be parsed.
    """
    values: dict[str, Any] = {}
    for field, var in _ENV_VARS.items():
        raw = os.environ.get(var)
        if raw is None:
            continue
        if field in ("timeout", "retry_attempts"):
            try:
                values[field] = int(raw)
            except ValueError:
                raise ConfigError(f"{var} must be an integer, got {raw!r}") from None
        elif field == "debug":
            lowered = raw.strip().lower()
            if lowered in _TRUTHY:
                values[field] = True
            elif lowered in _FALSY:
                values[field] = False
            else:
                raise ConfigError(f"{var} must be a boolean, got {raw!r}")
        else:
            values[field] = raw
    return values


# --- Precedence resolution ---


def resolve_config(
    api: str = LEARNING,
    env: str = DEVELOPMENT,
    *,
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: Optional[int] = None,
    retry_attempts: Optional[int] = None,
    debug: Optional[bool] = None,
    project_file: Optional[Path] = None,
) -> ClientConfig:
    """Resolve the effective :class:`ClientConfig`.

    Precedence (high to low):
        1. Explicit arguments
        2. Environment variables (``SFR_BASE_URL``, ...)
        3. Project config (``./sfr-sdk.json``)
        4. The ``api``/``env`` preset

    Raises:
        ConfigError: On unknown presets, unreadable files, unparsable
            environment variables or values failing validation.
    """
    values = preset_values(api, env)

    project = load_project_config(project_file)
    if project is not None:
        values.update(project)

    values.update(load_env_overrides())

    explicit = {
        "base_url": base_url,
        "api_key": api_key,
        "timeout": timeout,
        "retry_attempts": retry_attempts,
        "debug": debug,
    }
    values.update({k: v for k, v in explicit.items() if v is not None})

    return _validate(values, source=f"{api}/{env}")


def _validate(values: dict[str, Any], source: str) -> ClientConfig:
    try:
        return ClientConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration ({source}): {exc}") from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a bearer token from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    raise ConfigError(f"Unknown credential source format: {source}")
