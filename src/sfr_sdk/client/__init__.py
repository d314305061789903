"""HTTP layer for sfr-sdk.

Provides :class:`RequestExecutor`, the asynchronous client wrapping
:class:`httpx.AsyncClient` that every resource client delegates to. It
injects JSON defaults, bearer token and API key headers, retries server
errors and transport failures with capped exponential backoff, and raises
normalized :class:`~sfr_sdk.exceptions.SfrError` instances.

Example::

    from sfr_sdk.client import RequestExecutor
    from sfr_sdk.models import ClientConfig

    async with RequestExecutor(ClientConfig(base_url="http://localhost:8080/api")) as api:
        health = await api.health_check()
"""

from sfr_sdk.client.executor import RequestExecutor, backoff_delay_ms, is_final_attempt

__all__ = ["RequestExecutor", "backoff_delay_ms", "is_final_attempt"]
