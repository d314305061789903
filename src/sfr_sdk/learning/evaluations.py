"""Content evaluation (rating and review) endpoints."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from sfr_sdk.client.executor import RequestExecutor
from sfr_sdk.learning.models import (
    EvaluationDto,
    EvaluationResponse,
    EvaluationStats,
    Page,
    RatedContent,
    ReportReason,
    dump_request,
)


class EvaluationsClient:
    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def submit_evaluation(self, evaluation: EvaluationDto) -> EvaluationResponse:
        data = await self._executor.post("/evaluations", evaluation)
        return EvaluationResponse.model_validate(data)

    async def get_evaluations(
        self,
        content_id: int,
        page: Optional[int] = None,
        size: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Page[EvaluationResponse]:
        """List evaluations of one content item.

        ``sort_by`` is ``createdAt`` or ``rating``; ``sort_order`` is
        ``asc`` or ``desc``.
        """
        data = await self._executor.get(
            "/evaluations",
            params={
                "contentId": content_id,
                "page": page,
                "size": size,
                "sortBy": sort_by,
                "sortOrder": sort_order,
            },
        )
        return Page[EvaluationResponse].model_validate(data)

    async def get_evaluation(self, evaluation_id: int) -> EvaluationResponse:
        data = await self._executor.get(f"/evaluations/{evaluation_id}")
        return EvaluationResponse.model_validate(data)

    async def update_evaluation(
        self,
        evaluation_id: int,
        evaluation: Union[EvaluationDto, Mapping[str, Any]],
    ) -> EvaluationResponse:
        data = await self._executor.put(f"/evaluations/{evaluation_id}", dump_request(evaluation))
        return EvaluationResponse.model_validate(data)

    async def delete_evaluation(self, evaluation_id: int) -> None:
        await self._executor.delete(f"/evaluations/{evaluation_id}")

    async def get_user_evaluations(
        self,
        user_id: Optional[str] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
        content_id: Optional[int] = None,
    ) -> Page[EvaluationResponse]:
        """Evaluations written by *user_id*, or by the caller when omitted."""
        path = "/evaluations/user" if user_id else "/evaluations/me"
        data = await self._executor.get(
            path,
            params={"userId": user_id, "page": page, "size": size, "contentId": content_id},
        )
        return Page[EvaluationResponse].model_validate(data)

    async def get_evaluation_stats(self, content_id: int) -> EvaluationStats:
        data = await self._executor.get("/evaluations/stats", params={"contentId": content_id})
        return EvaluationStats.model_validate(data)

    async def get_character_evaluations(
        self,
        character_id: str,
        page: Optional[int] = None,
        size: Optional[int] = None,
        content_id: Optional[int] = None,
    ) -> Page[EvaluationResponse]:
        data = await self._executor.get(
            "/evaluations/character",
            params={"characterId": character_id, "page": page, "size": size, "contentId": content_id},
        )
        return Page[EvaluationResponse].model_validate(data)

    async def vote_evaluation_helpfulness(self, evaluation_id: int, helpful: bool) -> Any:
        return await self._executor.post(
            f"/evaluations/{evaluation_id}/vote", {"helpful": helpful}
        )

    async def reply_to_evaluation(self, evaluation_id: int, reply: str) -> Any:
        return await self._executor.post(f"/evaluations/{evaluation_id}/reply", {"reply": reply})

    async def report_evaluation(
        self,
        evaluation_id: int,
        reason: ReportReason,
        details: Optional[str] = None,
    ) -> Any:
        body: dict[str, Any] = {"reason": ReportReason(reason).value}
        if details is not None:
            body["details"] = details
        return await self._executor.post(f"/evaluations/{evaluation_id}/report", body)

    async def get_highly_rated_content(
        self,
        space_id: Optional[int] = None,
        min_rating: Optional[float] = None,
        min_evaluations: Optional[int] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Page[RatedContent]:
        data = await self._executor.get(
            "/evaluations/top-rated",
            params={
                "spaceId": space_id,
                "minRating": min_rating,
                "minEvaluations": min_evaluations,
                "page": page,
                "size": size,
            },
        )
        return Page[RatedContent].model_validate(data)
