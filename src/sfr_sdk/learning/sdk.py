"""The :class:`SfrLearningSDK` facade and its factory functions.

The facade owns one :class:`~sfr_sdk.client.executor.RequestExecutor` and
shares it between the four resource clients, so a token set on the SDK is
seen by every call.

Example::

    async with create_dev_sdk(token="jwt") as sdk:
        courses = await sdk.get_courses(mode=LearningMode.SCHOOL)
        overview = await sdk.get_complete_space_info(courses.content[0].id)
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional, Union

import httpx

from sfr_sdk.client.executor import DebugSink, RequestExecutor, Sleep
from sfr_sdk.config import DEVELOPMENT, LEARNING, PRODUCTION, preset_config
from sfr_sdk.learning.content import LearningContentClient
from sfr_sdk.learning.evaluations import EvaluationsClient
from sfr_sdk.learning.models import (
    EnrollmentResult,
    EvaluationDto,
    EvaluationResponse,
    LearningContent,
    LearningMode,
    LearningSpace,
    LearningStats,
    Page,
    ProgressRecordRequest,
    SpaceOverview,
    SpaceStats,
)
from sfr_sdk.learning.quiz import QuizClient
from sfr_sdk.learning.spaces import LearningSpacesClient
from sfr_sdk.models import ClientConfig, HealthStatus


class SfrLearningSDK:
    """Entry point to the learning API.

    Args:
        config: Connection parameters.
        transport: Optional :mod:`httpx` transport forwarded to the executor.
        sleep: Backoff sleep forwarded to the executor.
        debug_sink: Trace sink forwarded to the executor.

    Attributes:
        spaces: :class:`LearningSpacesClient`.
        content: :class:`LearningContentClient`.
        evaluations: :class:`EvaluationsClient`.
        quiz: :class:`QuizClient`.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Sleep] = None,
        debug_sink: Optional[DebugSink] = None,
    ) -> None:
        kwargs: dict[str, Any] = {"transport": transport, "debug_sink": debug_sink}
        if sleep is not None:
            kwargs["sleep"] = sleep
        self._executor = RequestExecutor(config, **kwargs)
        self.spaces = LearningSpacesClient(self._executor)
        self.content = LearningContentClient(self._executor)
        self.evaluations = EvaluationsClient(self._executor)
        self.quiz = QuizClient(self._executor)

    async def __aenter__(self) -> SfrLearningSDK:
        await self._executor.__aenter__()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._executor.aclose()

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def set_access_token(self, token: str) -> None:
        self._executor.set_access_token(token)

    def clear_access_token(self) -> None:
        self._executor.clear_access_token()

    async def health_check(self) -> HealthStatus:
        return await self._executor.health_check()

    def get_config(self) -> ClientConfig:
        return self._executor.get_config()

    # ------------------------------------------------------------------ #
    # Convenience methods
    # ------------------------------------------------------------------ #

    async def get_courses(
        self,
        mode: Optional[LearningMode] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Page[LearningSpace]:
        return await self.spaces.get_courses(mode=mode, page=page, size=size)

    async def enroll_course(
        self, course_id: Union[int, str], character_id: Optional[str] = None
    ) -> EnrollmentResult:
        """Join a course; string ids (e.g. from a URL) are converted to ``int``."""
        return await self.spaces.enroll_course(int(course_id), character_id)

    async def submit_evaluation(self, evaluation: EvaluationDto) -> EvaluationResponse:
        return await self.evaluations.submit_evaluation(evaluation)

    async def record_progress(
        self,
        space_id: int,
        content_id: int,
        progress: Union[ProgressRecordRequest, Mapping[str, Any]],
    ) -> Any:
        return await self.content.record_progress(space_id, content_id, progress)

    async def get_next_content(self, space_id: int) -> Optional[LearningContent]:
        return await self.content.get_next_content(space_id)

    async def get_learning_stats(self, space_id: int) -> LearningStats:
        """Combine the caller's progress and quiz statistics for a space."""
        progress = await self.content.get_progress(space_id)
        quiz_stats = await self.quiz.get_quiz_stats(space_id)
        return LearningStats(
            progress=progress,
            quiz_stats=quiz_stats,
            completion_rate=progress.overall_progress,
            total_time_spent=progress.total_time_spent,
            achievements=progress.achievements,
        )

    async def get_complete_space_info(self, space_id: int) -> SpaceOverview:
        """Fetch space, content, progress and quizzes concurrently.

        The first failing call propagates its error.
        """
        space, content, progress, quizzes = await asyncio.gather(
            self.spaces.get_course(space_id),
            self.content.get_content(space_id),
            self.content.get_progress(space_id),
            self.quiz.get_quizzes(space_id),
        )
        return SpaceOverview(
            space=space,
            content=content.content,
            progress=progress,
            quizzes=quizzes.quizzes,
            stats=SpaceStats(
                content_count=content.total_elements,
                quiz_count=quizzes.total_count,
                completion_rate=progress.overall_progress,
            ),
        )


# ------------------------------------------------------------------ #
# Factories
# ------------------------------------------------------------------ #


def create_sfr_learning_sdk(
    base_url: str,
    *,
    api_key: Optional[str] = None,
    timeout: Optional[int] = None,
    debug: Optional[bool] = None,
    **sdk_kwargs: Any,
) -> SfrLearningSDK:
    """Build an SDK for *base_url*; unset options keep the config defaults."""
    options = {"api_key": api_key, "timeout": timeout, "debug": debug}
    config = ClientConfig(base_url=base_url, **{k: v for k, v in options.items() if v is not None})
    return SfrLearningSDK(config, **sdk_kwargs)


def create_dev_sdk(token: Optional[str] = None, **sdk_kwargs: Any) -> SfrLearningSDK:
    """SDK for a local server with debug tracing and a 15 s timeout."""
    sdk = SfrLearningSDK(preset_config(LEARNING, DEVELOPMENT), **sdk_kwargs)
    if token:
        sdk.set_access_token(token)
    return sdk


def create_prod_sdk(
    token: str, api_key: Optional[str] = None, **sdk_kwargs: Any
) -> SfrLearningSDK:
    """SDK for the production API: 10 s timeout, three retries, no tracing."""
    sdk = SfrLearningSDK(preset_config(LEARNING, PRODUCTION, api_key=api_key), **sdk_kwargs)
    sdk.set_access_token(token)
    return sdk
