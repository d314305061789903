"""Fixtures for the token API client tests."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import pytest

from sfr_sdk.crypto import SfrCryptoApiClient
from sfr_sdk.models import ClientConfig

CRYPTO_URL = "http://api.test/api/v1"


@pytest.fixture
def crypto(fake_api) -> SfrCryptoApiClient:
    """A token API client wired to ``fake_api`` with retries and tracing off."""
    config = ClientConfig(base_url=CRYPTO_URL, retry_attempts=0)
    return SfrCryptoApiClient(config, transport=fake_api.transport)


@pytest.fixture
def run(crypto) -> Callable[[Callable[[SfrCryptoApiClient], Awaitable[Any]]], Any]:
    """Run ``fn(crypto)`` inside a fresh event loop and an open client session."""

    def _run(fn: Callable[[SfrCryptoApiClient], Awaitable[Any]]) -> Any:
        async def _go() -> Any:
            async with crypto:
                return await fn(crypto)

        return asyncio.run(_go())

    return _run
