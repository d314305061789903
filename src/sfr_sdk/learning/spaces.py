"""Learning space ("course") endpoints."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from sfr_sdk.client.executor import RequestExecutor
from sfr_sdk.learning.models import (
    EnrollmentResult,
    LearningMode,
    LearningSpace,
    LearningSpaceCreateRequest,
    LearningSpaceStatus,
    Page,
    dump_request,
)


class LearningSpacesClient:
    """Create, browse, join and configure learning spaces.

    Args:
        executor: The shared :class:`~sfr_sdk.client.executor.RequestExecutor`.
    """

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def get_courses(
        self,
        mode: Optional[LearningMode] = None,
        status: Optional[LearningSpaceStatus] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Page[LearningSpace]:
        data = await self._executor.get(
            "/spaces", params={"mode": mode, "status": status, "page": page, "size": size}
        )
        return Page[LearningSpace].model_validate(data)

    async def get_course(self, space_id: int) -> LearningSpace:
        data = await self._executor.get(f"/spaces/{space_id}")
        return LearningSpace.model_validate(data)

    async def create_course(self, request: LearningSpaceCreateRequest) -> LearningSpace:
        data = await self._executor.post("/spaces", request)
        return LearningSpace.model_validate(data)

    async def update_course(
        self,
        space_id: int,
        request: Union[LearningSpaceCreateRequest, Mapping[str, Any]],
    ) -> LearningSpace:
        """Update a space. *request* may be a partial mapping of wire fields."""
        data = await self._executor.put(f"/spaces/{space_id}", dump_request(request))
        return LearningSpace.model_validate(data)

    async def delete_course(self, space_id: int) -> None:
        await self._executor.delete(f"/spaces/{space_id}")

    async def enroll_course(
        self, space_id: int, character_id: Optional[str] = None
    ) -> EnrollmentResult:
        """Join a space, optionally as one of the user's characters.

        Spaces that require approval answer with ``PENDING_APPROVAL``.
        """
        body = {"characterId": character_id} if character_id else {}
        data = await self._executor.post(f"/spaces/{space_id}/join", body)
        return EnrollmentResult.model_validate(data)

    async def leave_course(self, space_id: int) -> None:
        await self._executor.post(f"/spaces/{space_id}/leave")

    async def get_course_members(self, space_id: int) -> list[Any]:
        """Return the member list embedded in the space detail, or ``[]``."""
        space = await self.get_course(space_id)
        return list((space.model_extra or {}).get("members") or [])

    async def get_course_config(self, space_id: int) -> Any:
        return await self._executor.get(f"/spaces/{space_id}/config")

    async def update_course_config(self, space_id: int, config: Mapping[str, Any]) -> Any:
        return await self._executor.put(f"/spaces/{space_id}/config", dict(config))

    async def search_public_courses(
        self,
        query: str,
        mode: Optional[LearningMode] = None,
        difficulty: Optional[str] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Page[LearningSpace]:
        data = await self._executor.get(
            "/spaces/search",
            params={"q": query, "mode": mode, "difficulty": difficulty, "page": page, "size": size},
        )
        return Page[LearningSpace].model_validate(data)

    async def get_popular_courses(self, limit: int = 10) -> list[LearningSpace]:
        data = await self._executor.get("/spaces/popular", params={"limit": limit})
        return [LearningSpace.model_validate(item) for item in data or []]

    async def get_recommended_courses(self, user_id: Optional[str] = None) -> list[LearningSpace]:
        """Recommendations for *user_id*, or for the authenticated user when omitted."""
        data = await self._executor.get("/spaces/recommended", params={"userId": user_id})
        return [LearningSpace.model_validate(item) for item in data or []]
