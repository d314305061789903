"""Exception hierarchy for sfr-sdk.

Every failure surfaced by the request executor is an :class:`SfrError`,
the normalized error shape shared by the learning and crypto SDKs. It
carries the HTTP ``status`` (``0`` when no response was received), a
machine-readable ``code``, the human ``message``, the originating request
``path`` and a ``timestamp``. Each subclass also sets an ``exit_code`` from
:mod:`sfr_sdk.exit_codes` so the CLI can exit with a meaningful status.

Subclass hierarchy::

    SfrError (exit 1)
    +-- ConnectionError_    (exit 6)   status 0, no response
    +-- AuthError           (exit 3)   401 / 403
    +-- NotFoundError       (exit 4)   404
    +-- ClientError         (exit 7)   other 4xx
    +-- ServerError         (exit 5)   5xx
    +-- HealthCheckError    (exit 8)
    +-- ConfigError         (exit 1)
    +-- ValidationError     (exit 2)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sfr_sdk.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CLIENT_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HEALTH_CHECK_FAILED,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)

NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT_ERROR = "TIMEOUT_ERROR"
HTTP_ERROR = "HTTP_ERROR"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SfrError(Exception):
    """Base exception for all sfr-sdk errors.

    Args:
        message: Human-readable error description.
        status: HTTP status code, ``0`` for transport failures and for
            errors raised locally (config, validation).
        code: Machine error code, e.g. ``NETWORK_ERROR`` or the ``error``
            field of the API's error body.
        path: Request path that produced the error.
        timestamp: ISO-8601 timestamp; defaults to the current UTC time.
        details: Optional structured details from the API error body.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE
    default_code: str = "SFR_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status: int = 0,
        code: Optional[str] = None,
        path: str = "",
        timestamp: Optional[str] = None,
        details: Any = None,
        exit_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code or self.default_code
        self.path = path
        self.timestamp = timestamp or _utc_now()
        self.details = details
        if exit_code is not None:
            self.exit_code = exit_code

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a JSON-friendly dict (used by the CLI)."""
        data: dict[str, Any] = {
            "status": self.status,
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "timestamp": self.timestamp,
        }
        if self.details is not None:
            data["details"] = self.details
        return data

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self.status}, code={self.code!r}, "
            f"message={self.message!r}, path={self.path!r})"
        )


class ConnectionError_(SfrError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Always carries ``status == 0``. Named with a trailing underscore to
    avoid shadowing the built-in ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR
    default_code = NETWORK_ERROR


class AuthError(SfrError):
    """Raised when the API returns HTTP 401 or 403."""

    exit_code = EXIT_AUTH_FAILURE
    default_code = HTTP_ERROR


class NotFoundError(SfrError):
    """Raised when the API returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND
    default_code = HTTP_ERROR


class ClientError(SfrError):
    """Raised for 4xx responses other than 401, 403 and 404."""

    exit_code = EXIT_CLIENT_ERROR
    default_code = HTTP_ERROR


class ServerError(SfrError):
    """Raised when the API returns an HTTP 5xx status after all retries."""

    exit_code = EXIT_SERVER_ERROR
    default_code = HTTP_ERROR


class HealthCheckError(SfrError):
    """Raised when the ``/health`` probe fails for any reason."""

    exit_code = EXIT_HEALTH_CHECK_FAILED
    default_code = "HEALTH_CHECK_FAILED"


class ConfigError(SfrError):
    """Raised for configuration problems (invalid values, bad JSON, unresolved credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
    default_code = "CONFIG_ERROR"


class ValidationError(SfrError):
    """Raised by :func:`~sfr_sdk.crypto.utils.throw_if_invalid` for failed validations.

    Args:
        errors: The individual validation messages.
    """

    exit_code = EXIT_INVALID_USAGE
    default_code = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]) -> None:
        super().__init__(f"Validation failed: {', '.join(errors)}", details=list(errors))
        self.errors = list(errors)


def error_class_for_status(status: int) -> type[SfrError]:
    """Map an HTTP status code to the matching :class:`SfrError` subclass."""
    if status == 0:
        return ConnectionError_
    if status in (401, 403):
        return AuthError
    if status == 404:
        return NotFoundError
    if status >= 500:
        return ServerError
    if status >= 400:
        return ClientError
    return SfrError
