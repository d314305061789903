"""Response decoding helpers shared by the executor.

:func:`extract_response_data` turns an :class:`httpx.Response` into the
value returned to callers; :func:`parse_error_body` reads the API's
structured error body when one is present.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from sfr_sdk.models import ErrorResponse


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first. If that fails (e.g. the
    response is HTML or plain text), returns the raw text. Returns
    ``None`` for responses with no content (e.g. ``204 No Content``).

    Args:
        response: The :class:`httpx.Response` to extract data from.

    Returns:
        A JSON-decoded object, a ``str`` of raw text, or ``None``.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        pass

    return response.text


def parse_error_body(data: Any) -> Optional[ErrorResponse]:
    """Validate a decoded error body against :class:`ErrorResponse`.

    Args:
        data: Output of :func:`extract_response_data` for a failed response.

    Returns:
        The parsed error body, or ``None`` when *data* is not a JSON object
        or its fields have unexpected types.
    """
    if not isinstance(data, dict):
        return None
    try:
        return ErrorResponse.model_validate(data)
    except ValidationError:
        return None
