"""Quiz endpoints: authoring, attempts, results and practice sessions."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from sfr_sdk.client.executor import RequestExecutor
from sfr_sdk.learning.models import (
    Quiz,
    QuizAnswerRequest,
    QuizCreateRequest,
    QuizDifficulty,
    QuizList,
    QuizResult,
    QuizStats,
    QuizStatus,
    dump_request,
)


class QuizClient:
    """Quizzes belonging to a learning space.

    Graded attempts go through :meth:`submit_quiz_answer`; practice
    sessions (:meth:`start_practice_mode`) return feedback without being
    recorded as attempts.
    """

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def get_quizzes(
        self,
        space_id: int,
        difficulty: Optional[QuizDifficulty] = None,
        status: Optional[QuizStatus] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> QuizList:
        data = await self._executor.get(
            f"/spaces/{space_id}/quizzes",
            params={"difficulty": difficulty, "status": status, "page": page, "size": size},
        )
        return QuizList.model_validate(data)

    async def get_quiz(self, space_id: int, quiz_id: int) -> Quiz:
        """Quiz detail; the question list is available as ``quiz.model_extra["questions"]``."""
        data = await self._executor.get(f"/spaces/{space_id}/quizzes/{quiz_id}")
        return Quiz.model_validate(data)

    async def create_quiz(self, space_id: int, request: QuizCreateRequest) -> Quiz:
        data = await self._executor.post(f"/spaces/{space_id}/quizzes", request)
        return Quiz.model_validate(data)

    async def update_quiz(
        self,
        space_id: int,
        quiz_id: int,
        request: Union[QuizCreateRequest, Mapping[str, Any]],
    ) -> Quiz:
        data = await self._executor.put(
            f"/spaces/{space_id}/quizzes/{quiz_id}", dump_request(request)
        )
        return Quiz.model_validate(data)

    async def delete_quiz(self, space_id: int, quiz_id: int) -> None:
        await self._executor.delete(f"/spaces/{space_id}/quizzes/{quiz_id}")

    async def submit_quiz_answer(
        self, space_id: int, quiz_id: int, answers: QuizAnswerRequest
    ) -> QuizResult:
        data = await self._executor.post(
            f"/spaces/{space_id}/quizzes/{quiz_id}/attempt", answers
        )
        return QuizResult.model_validate(data)

    async def get_quiz_result(
        self, space_id: int, quiz_id: int, attempt_id: Optional[int] = None
    ) -> QuizResult:
        """Result of *attempt_id*, or of the latest attempt when omitted."""
        attempt = attempt_id if attempt_id else "latest"
        data = await self._executor.get(
            f"/spaces/{space_id}/quizzes/{quiz_id}/results/{attempt}"
        )
        return QuizResult.model_validate(data)

    async def get_quiz_attempts(self, space_id: int, quiz_id: int) -> list[QuizResult]:
        data = await self._executor.get(f"/spaces/{space_id}/quizzes/{quiz_id}/attempts")
        return [QuizResult.model_validate(item) for item in data or []]

    async def get_quiz_stats(self, space_id: int, user_id: Optional[str] = None) -> QuizStats:
        data = await self._executor.get(
            f"/spaces/{space_id}/quizzes/stats", params={"userId": user_id}
        )
        return QuizStats.model_validate(data)

    async def get_quiz_leaderboard(
        self, space_id: int, quiz_id: int, limit: int = 10
    ) -> list[dict[str, Any]]:
        return await self._executor.get(
            f"/spaces/{space_id}/quizzes/{quiz_id}/leaderboard", params={"limit": limit}
        )

    async def start_practice_mode(self, space_id: int, quiz_id: int) -> dict[str, Any]:
        return await self._executor.post(f"/spaces/{space_id}/quizzes/{quiz_id}/practice")

    async def submit_practice_answer(
        self,
        space_id: int,
        quiz_id: int,
        session_id: str,
        answers: QuizAnswerRequest,
    ) -> dict[str, Any]:
        return await self._executor.post(
            f"/spaces/{space_id}/quizzes/{quiz_id}/practice/{session_id}/submit", answers
        )

    async def get_quizzes_by_difficulty(
        self, space_id: int, difficulty: QuizDifficulty
    ) -> list[Quiz]:
        data = await self._executor.get(
            f"/spaces/{space_id}/quizzes", params={"difficulty": difficulty}
        )
        return [Quiz.model_validate(item) for item in data or []]

    async def get_recommended_quizzes(self, space_id: int) -> list[Quiz]:
        data = await self._executor.get(f"/spaces/{space_id}/quizzes/recommended")
        return [Quiz.model_validate(item) for item in data or []]
