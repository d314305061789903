"""Fixtures for the learning SDK tests."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import pytest

from sfr_sdk.learning import SfrLearningSDK
from sfr_sdk.models import ClientConfig

LEARNING_URL = "http://api.test/api/learning"


@pytest.fixture
def sdk(fake_api) -> SfrLearningSDK:
    """A learning SDK wired to ``fake_api`` with retries and tracing off."""
    config = ClientConfig(base_url=LEARNING_URL, retry_attempts=0, debug=False)
    return SfrLearningSDK(config, transport=fake_api.transport)


@pytest.fixture
def run(sdk) -> Callable[[Callable[[SfrLearningSDK], Awaitable[Any]]], Any]:
    """Run ``fn(sdk)`` inside a fresh event loop and an open SDK session."""

    def _run(fn: Callable[[SfrLearningSDK], Awaitable[Any]]) -> Any:
        async def _go() -> Any:
            async with sdk:
                return await fn(sdk)

        return asyncio.run(_go())

    return _run
