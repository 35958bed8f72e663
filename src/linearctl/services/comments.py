"""CommentService — read and post issue comments."""

from __future__ import annotations

from typing import Any

from linearctl.domain.types import Entity
from linearctl.errors import LinearctlError
from linearctl.services.base import BaseService
from linearctl.services.result import ServiceResult
from linearctl.services.router import DEFAULT_PAGE_SIZE
from linearctl.services.telemetry import traced

COMMENT_REQUIRED = ("body", "issueId")

# Caller-facing names that differ from the backend's input fields.
_COMMENT_FIELDS = {"parentCommentId": "parentId"}


class CommentService(BaseService):
    @traced
    async def get_issue_comments(
        self,
        issue_id: str | None,
        *,
        first: int | None = None,
        after: str | None = None,
        include_archived: bool | None = None,
    ) -> ServiceResult:
        """One page of an issue's comments."""
        op = "get_issue_comments"
        try:
            self._validate({"issueId": issue_id}, required=("issueId",))
            data = await self.router.list_children(
                Entity.COMMENT,
                {
                    "issueId": issue_id,
                    "first": first or DEFAULT_PAGE_SIZE,
                    "after": after,
                    "includeArchived": bool(include_archived),
                },
            )
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def create_comment(self, payload: Any) -> ServiceResult:
        """Post a comment, optionally as a reply to ``parentCommentId``."""
        op = "create_comment"
        try:
            payload = self._require_mapping(payload, "comment")
            self._validate(payload, required=COMMENT_REQUIRED)
            comment = {
                _COMMENT_FIELDS.get(key, key): value
                for key, value in payload.items()
                if value is not None
            }
            data = await self.router.create_one(Entity.COMMENT, comment)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)
