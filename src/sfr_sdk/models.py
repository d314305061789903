"""Canonical Pydantic models for the request executor.

These models describe the data flowing through
:class:`~sfr_sdk.client.executor.RequestExecutor`:

* :class:`ClientConfig` -- immutable connection parameters, validated once at
  construction. Resolved from presets, files and environment variables by
  :func:`~sfr_sdk.config.resolve_config`.
* :class:`RequestSpec` -- one logical outbound call built by a resource
  client and consumed immediately by the executor.
* :class:`ErrorResponse` -- the JSON error body returned by the remote API.
* :class:`HealthStatus` -- result of the ``/health`` probe.

The learning and crypto DTO catalogs live in
:mod:`sfr_sdk.learning.models` and :mod:`sfr_sdk.crypto.models`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_RETRY_ATTEMPTS = 3


class ClientConfig(BaseModel):
    """Connection parameters for a :class:`~sfr_sdk.client.executor.RequestExecutor`.

    The model is frozen; the executor hands out deep copies from
    :meth:`~sfr_sdk.client.executor.RequestExecutor.get_config` so callers
    can never mutate the live configuration.

    Example::

        ClientConfig(
            base_url="https://api.sfr.tokyo/api/learning",
            api_key="k-123",
            timeout=10000,
            retry_attempts=3,
        )
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Base URL every request path is appended to")
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS, gt=0, description="Default request timeout in milliseconds"
    )
    default_headers: dict[str, str] = Field(
        default_factory=dict, description="Headers added to every request"
    )
    api_key: Optional[str] = Field(
        default=None, description="Static API key sent as X-API-Key"
    )
    retry_attempts: int = Field(
        default=DEFAULT_RETRY_ATTEMPTS, ge=0, description="Retries after the first attempt"
    )
    debug: bool = Field(default=False, description="Emit every request/response to the debug sink")

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        """The default timeout converted to seconds for :mod:`httpx`."""
        return self.timeout / 1000


class HTTPMethod(str, enum.Enum):
    """HTTP verbs supported by the executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class RequestSpec(BaseModel):
    """A single logical API call.

    ``body`` is JSON-encoded. When ``form`` or ``files`` is set the call is
    multipart: the fields and files are sent as ``multipart/form-data``
    and ``body`` is ignored.
    """

    method: HTTPMethod
    path: str
    params: Optional[dict[str, Any]] = None
    body: Any = None
    form: Optional[dict[str, Any]] = None
    files: Optional[dict[str, Any]] = None
    headers: Optional[dict[str, str]] = None
    timeout: Optional[int] = Field(default=None, gt=0, description="Override in milliseconds")
    retries: Optional[int] = Field(default=None, ge=0, description="Override for retry attempts")

    @property
    def is_multipart(self) -> bool:
        return self.form is not None or self.files is not None


class ErrorDetail(BaseModel):
    """A field-level entry in :attr:`ErrorResponse.details`."""

    model_config = ConfigDict(extra="allow")

    field: Optional[str] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned by the API: ``{error, message, details?, timestamp, path}``."""

    model_config = ConfigDict(extra="allow")

    error: Optional[str] = None
    message: Optional[str] = None
    details: Any = None
    timestamp: Optional[str] = None
    path: Optional[str] = None


class HealthStatus(BaseModel):
    """Result of :meth:`~sfr_sdk.client.executor.RequestExecutor.health_check`."""

    model_config = ConfigDict(extra="allow")

    status: str
    timestamp: str
