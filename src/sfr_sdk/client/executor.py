"""Asynchronous request executor shared by the learning and crypto SDKs.

:class:`RequestExecutor` wraps :class:`httpx.AsyncClient` and is the only
place in the SDK that talks to the network. Every resource client holds a
reference to one executor and calls its verb methods. For each call the
executor:

1. Merges headers through a fixed pipeline: JSON defaults, configured
   default headers, bearer token, API key, per-call overrides and finally
   the multipart content type.
2. Sends the request, retrying server errors and transport failures with
   exponential backoff (1 s, 2 s, 4 s, capped at 5 s).
3. Decodes the JSON body on success, or raises a normalized
   :class:`~sfr_sdk.exceptions.SfrError` carrying status, code, message,
   path and timestamp.

When the config's ``debug`` flag is on, every request, response, error and
retry is handed to a debug sink (by default the stderr trace of
:mod:`sfr_sdk.output`).

Example::

    async with RequestExecutor(ClientConfig(base_url="http://localhost:8080/api")) as api:
        api.set_access_token("jwt")
        spaces = await api.get("/spaces", params={"page": 0})
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from sfr_sdk.client.response import extract_response_data, parse_error_body
from sfr_sdk.exceptions import (
    HTTP_ERROR,
    NETWORK_ERROR,
    TIMEOUT_ERROR,
    HealthCheckError,
    SfrError,
    error_class_for_status,
)
from sfr_sdk.models import ClientConfig, HealthStatus, HTTPMethod, RequestSpec
from sfr_sdk.output import get_output

logger = logging.getLogger(__name__)

DebugSink = Callable[[str, Mapping[str, Any]], None]
Sleep = Callable[[float], Awaitable[Any]]

BACKOFF_BASE_MS = 1000
BACKOFF_CAP_MS = 5000
NON_RETRYABLE_STATUSES = frozenset({401, 403, 404})
HEALTH_PATH = "/health"


def backoff_delay_ms(attempt: int) -> int:
    """Return the wait before retrying after zero-indexed *attempt*."""
    return min(BACKOFF_BASE_MS * 2 ** attempt, BACKOFF_CAP_MS)


def is_final_attempt(attempt: int, max_retries: int, status: int) -> bool:
    """Decide whether a failed response ends the retry loop.

    401, 403 and 404 are listed on their own even though ``status < 500``
    already covers them.
    """
    return (
        attempt == max_retries
        or status < 500
        or status in NON_RETRYABLE_STATUSES
    )


def _default_sink(event: str, payload: Mapping[str, Any]) -> None:
    get_output().trace(event, payload)


class RequestExecutor:
    """Issues HTTP calls with header injection, retry and error normalization.

    Args:
        config: Connection parameters. Stored as-is; the model is frozen.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.
        sleep: Awaitable used between retries, called with seconds.
        debug_sink: Receives ``(event, payload)`` records when
            ``config.debug`` is true. Defaults to the stderr trace.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
        debug_sink: Optional[DebugSink] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._sleep = sleep
        self._debug_sink = debug_sink or _default_sink
        self._access_token: Optional[str] = None
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> RequestExecutor:
        self._get_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    # ------------------------------------------------------------------ #
    # Configuration and credentials
    # ------------------------------------------------------------------ #

    def get_config(self) -> ClientConfig:
        """Return a deep copy of the configuration."""
        return self._config.model_copy(deep=True)

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def set_access_token(self, token: str) -> None:
        """Use *token* as the bearer credential for every following request."""
        self._access_token = token

    def clear_access_token(self) -> None:
        """Stop sending the ``Authorization`` header."""
        self._access_token = None

    # ------------------------------------------------------------------ #
    # Verb methods
    # ------------------------------------------------------------------ #

    async def get(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
    ) -> Any:
        return await self.execute(
            _spec(HTTPMethod.GET, path, params=params, headers=headers, timeout=timeout, retries=retries)
        )

    async def post(
        self,
        path: str,
        body: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
    ) -> Any:
        return await self.execute(
            _spec(HTTPMethod.POST, path, body=body, params=params, headers=headers,
                  timeout=timeout, retries=retries)
        )

    async def put(
        self,
        path: str,
        body: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
    ) -> Any:
        return await self.execute(
            _spec(HTTPMethod.PUT, path, body=body, params=params, headers=headers,
                  timeout=timeout, retries=retries)
        )

    async def patch(
        self,
        path: str,
        body: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
    ) -> Any:
        return await self.execute(
            _spec(HTTPMethod.PATCH, path, body=body, params=params, headers=headers,
                  timeout=timeout, retries=retries)
        )

    async def delete(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
    ) -> Any:
        return await self.execute(
            _spec(HTTPMethod.DELETE, path, params=params, headers=headers,
                  timeout=timeout, retries=retries)
        )

    async def post_multipart(
        self,
        path: str,
        form: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
    ) -> Any:
        """POST *form* fields and *files* as ``multipart/form-data``.

        File values take any shape :mod:`httpx` accepts for ``files=``:
        a file object, bytes, or a ``(filename, content[, content_type])``
        tuple.
        """
        return await self.execute(
            _spec(HTTPMethod.POST, path, form=dict(form or {}), files=dict(files or {}),
                  headers=headers, timeout=timeout, retries=retries)
        )

    async def health_check(self) -> HealthStatus:
        """Probe ``GET /health``.

        Raises:
            HealthCheckError: On any failure; the original error is chained
                as ``__cause__`` but not exposed in the message.
        """
        try:
            data = await self.get(HEALTH_PATH)
            return HealthStatus.model_validate(data)
        except (SfrError, PydanticValidationError) as exc:
            raise HealthCheckError("API health check failed", path=HEALTH_PATH) from exc

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    async def execute(self, spec: RequestSpec) -> Any:
        """Send *spec*, retrying transient failures.

        Returns:
            The decoded response body (``None`` for an empty body).

        Raises:
            SfrError: The normalized error of the last attempt.
        """
        client = self._get_client()
        headers = self._merge_headers(spec)
        params = _clean_params(spec.params)
        timeout_ms = spec.timeout if spec.timeout is not None else self._config.timeout
        max_retries = spec.retries if spec.retries is not None else self._config.retry_attempts

        attempt = 0
        while True:
            request = self._build_request(client, spec, headers, params, timeout_ms)
            self._emit("request", {
                "method": request.method,
                "url": str(request.url),
                "headers": dict(request.headers),
                "body": spec.form if spec.is_multipart else _encode_body(spec.body),
            })

            try:
                response = await client.send(request)
            except httpx.RequestError as exc:
                error = self._transport_error(spec, exc)
                self._emit("error", {"status": None, "body": None, "message": error.message})
                if attempt == max_retries:
                    raise error from exc
            else:
                data = extract_response_data(response)
                if response.is_success:
                    self._emit("response", {
                        "status": response.status_code,
                        "body": data,
                        "headers": dict(response.headers),
                    })
                    return data

                error = self._response_error(spec, response, data)
                self._emit("error", {
                    "status": response.status_code,
                    "body": data,
                    "message": error.message,
                })
                if is_final_attempt(attempt, max_retries, response.status_code):
                    raise error

            delay_ms = backoff_delay_ms(attempt)
            await self._sleep(delay_ms / 1000)
            logger.debug(
                "Retrying %s %s (retry %d/%d) after %s",
                spec.method.value, spec.path, attempt + 1, max_retries, error.message,
            )
            self._emit("retry", {
                "method": spec.method.value,
                "url": self._url(spec.path),
                "attempt": attempt + 1,
                "max_retries": max_retries,
                "delay_ms": delay_ms,
                "error": error.message,
            })
            attempt += 1

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _merge_headers(self, spec: RequestSpec) -> httpx.Headers:
        """Build the outgoing headers; later steps win on key collision."""
        headers = httpx.Headers({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        headers.update(self._config.default_headers)

        token = self._access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        if self._config.api_key:
            headers["X-API-Key"] = self._config.api_key

        if spec.headers:
            headers.update(spec.headers)

        if spec.is_multipart:
            if _multipart_parts(spec.form, spec.files):
                # httpx writes multipart/form-data with the boundary parameter.
                headers.pop("Content-Type", None)
            else:
                # httpx sends no body, and so no content type, for zero parts.
                headers["Content-Type"] = "multipart/form-data"

        return headers

    def _build_request(
        self,
        client: httpx.AsyncClient,
        spec: RequestSpec,
        headers: httpx.Headers,
        params: dict[str, str],
        timeout_ms: int,
    ) -> httpx.Request:
        kwargs: dict[str, Any] = {
            "method": spec.method.value,
            "url": spec.path,
            "headers": headers,
            "params": params or None,
            "timeout": timeout_ms / 1000,
        }
        if spec.is_multipart:
            kwargs["files"] = _multipart_parts(spec.form, spec.files)
        elif spec.body is not None:
            kwargs["json"] = _encode_body(spec.body)
        return client.build_request(**kwargs)

    def _response_error(
        self, spec: RequestSpec, response: httpx.Response, data: Any
    ) -> SfrError:
        status = response.status_code
        message = f"HTTP {status}: {response.reason_phrase}".rstrip(": ")
        code = HTTP_ERROR
        timestamp: Optional[str] = None
        details: Any = None

        body = parse_error_body(data)
        if body is not None:
            message = body.message or message
            code = body.error or code
            timestamp = body.timestamp
            details = body.details

        error_cls = error_class_for_status(status)
        return error_cls(
            message,
            status=status,
            code=code,
            path=spec.path,
            timestamp=timestamp,
            details=details,
        )

    def _transport_error(self, spec: RequestSpec, exc: httpx.RequestError) -> SfrError:
        code = TIMEOUT_ERROR if isinstance(exc, httpx.TimeoutException) else NETWORK_ERROR
        message = str(exc) or type(exc).__name__
        return error_class_for_status(0)(message, status=0, code=code, path=spec.path)

    def _emit(self, event: str, payload: Mapping[str, Any]) -> None:
        if not self._config.debug:
            return
        try:
            self._debug_sink(event, payload)
        except Exception:
            logger.debug("Debug sink failed on %r event", event, exc_info=True)

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"


def _spec(method: HTTPMethod, path: str, **kwargs: Any) -> RequestSpec:
    for key in ("params", "headers"):
        if kwargs.get(key) is not None:
            kwargs[key] = dict(kwargs[key])
    return RequestSpec(method=method, path=path, **kwargs)


def _encode_body(body: Any) -> Any:
    """Serialise pydantic models with their wire (camelCase) field names."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return body


def _clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Drop ``None`` values and render the rest the way the API expects."""
    if not params:
        return {}
    cleaned: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        elif isinstance(value, enum.Enum):
            cleaned[key] = str(value.value)
        else:
            cleaned[key] = str(value)
    return cleaned


def _multipart_parts(
    form: Optional[Mapping[str, Any]], files: Optional[Mapping[str, Any]]
) -> list[tuple[str, Any]]:
    """Encode form fields as filename-less parts so httpx always emits multipart."""
    parts: list[tuple[str, Any]] = []
    for key, value in (form or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append((key, (None, str(value))))
    for key, value in (files or {}).items():
        parts.append((key, value))
    return parts
