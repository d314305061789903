"""Learning content and progress endpoints.

Content can be created from plain fields (sent as JSON) or together with
an uploaded file (sent as ``multipart/form-data``). In multipart form the
``tags`` list travels as a JSON-encoded string.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence, Union

from sfr_sdk.client.executor import RequestExecutor
from sfr_sdk.exceptions import NotFoundError
from sfr_sdk.learning.models import (
    ContentDifficulty,
    ContentType,
    LearningContent,
    LearningContentCreateRequest,
    LearningProgress,
    Page,
    PrerequisiteCheck,
    ProgressRecordRequest,
    dump_request,
)

ContentFields = Union[LearningContentCreateRequest, Mapping[str, Any]]


def _content_form(fields: Mapping[str, Any]) -> dict[str, Any]:
    form = dict(fields)
    if form.get("tags") is not None:
        form["tags"] = json.dumps(list(form["tags"]), ensure_ascii=False)
    return form


class LearningContentClient:
    """Content items of a learning space, plus the user's progress through them."""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def get_content(
        self,
        space_id: int,
        content_type: Optional[ContentType] = None,
        published: Optional[bool] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Page[LearningContent]:
        data = await self._executor.get(
            f"/spaces/{space_id}/content",
            params={"contentType": content_type, "published": published, "page": page, "size": size},
        )
        return Page[LearningContent].model_validate(data)

    async def get_content_by_id(self, space_id: int, content_id: int) -> LearningContent:
        data = await self._executor.get(f"/spaces/{space_id}/content/{content_id}")
        return LearningContent.model_validate(data)

    async def create_content(
        self,
        space_id: int,
        request: LearningContentCreateRequest,
        file: Any = None,
    ) -> LearningContent:
        """Create a content item.

        Args:
            space_id: Owning learning space.
            request: Content fields.
            file: Optional upload in any form :mod:`httpx` accepts for
                ``files=``. When given, the call is sent as multipart.
        """
        path = f"/spaces/{space_id}/content"
        if file is not None:
            data = await self._executor.post_multipart(
                path, _content_form(dump_request(request)), {"file": file}
            )
        else:
            data = await self._executor.post(path, request)
        return LearningContent.model_validate(data)

    async def update_content(
        self,
        space_id: int,
        content_id: int,
        request: ContentFields,
        file: Any = None,
    ) -> LearningContent:
        """Update a content item.

        With a *file* the update is a multipart ``POST`` to the item path;
        otherwise the (possibly partial) fields are sent with ``PUT``.
        """
        path = f"/spaces/{space_id}/content/{content_id}"
        fields = dump_request(request)
        if file is not None:
            data = await self._executor.post_multipart(path, _content_form(fields), {"file": file})
        else:
            data = await self._executor.put(path, fields)
        return LearningContent.model_validate(data)

    async def delete_content(self, space_id: int, content_id: int) -> None:
        await self._executor.delete(f"/spaces/{space_id}/content/{content_id}")

    async def get_progress(self, space_id: int) -> LearningProgress:
        data = await self._executor.get(f"/spaces/{space_id}/progress")
        return LearningProgress.model_validate(data)

    async def record_progress(
        self,
        space_id: int,
        content_id: int,
        request: Union[ProgressRecordRequest, Mapping[str, Any]],
    ) -> Any:
        return await self._executor.post(
            f"/spaces/{space_id}/content/{content_id}/progress", dump_request(request)
        )

    async def search_content(
        self,
        space_id: int,
        query: str,
        content_type: Optional[ContentType] = None,
        difficulty: Optional[ContentDifficulty] = None,
        tags: Optional[Sequence[str]] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Page[LearningContent]:
        data = await self._executor.get(
            f"/spaces/{space_id}/content/search",
            params={
                "q": query,
                "contentType": content_type,
                "difficulty": difficulty,
                "tags": ",".join(tags) if tags else None,
                "page": page,
                "size": size,
            },
        )
        return Page[LearningContent].model_validate(data)

    async def get_next_content(self, space_id: int) -> Optional[LearningContent]:
        """Return the next item to study, or ``None`` once the space is finished."""
        try:
            data = await self._executor.get(f"/spaces/{space_id}/content/next")
        except NotFoundError:
            return None
        return LearningContent.model_validate(data)

    async def check_prerequisites(self, space_id: int, content_id: int) -> PrerequisiteCheck:
        data = await self._executor.get(f"/spaces/{space_id}/content/{content_id}/prerequisites")
        return PrerequisiteCheck.model_validate(data)

    async def download_content(self, space_id: int, content_id: int) -> str:
        """Return a download URL for the item's file."""
        data = await self._executor.get(f"/spaces/{space_id}/content/{content_id}/download")
        return data["downloadUrl"]
