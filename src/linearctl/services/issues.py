"""IssueService — create, update, search, and delete issues.

Pipeline per call: VALIDATE → NORMALIZE → ROUTE → TRANSLATE → RESPOND.
Validation failures stop the call before any backend request.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic

from linearctl.domain.filters import FilterCriteria, build_issue_filter
from linearctl.domain.normalize import normalize_payload
from linearctl.domain.types import Entity, OrderBy
from linearctl.errors import LinearctlError, ValidationError
from linearctl.services.base import BaseService
from linearctl.services.result import ServiceResult
from linearctl.services.router import DEFAULT_ORDER_BY, DEFAULT_PAGE_SIZE
from linearctl.services.telemetry import traced

ISSUE_REQUIRED = ("title", "description", "teamId")
_ORDER_BY_VALUES = frozenset(o.value for o in OrderBy)


def validate_order_by(order_by: str | None, default: str = DEFAULT_ORDER_BY) -> str:
    """Return *order_by* if it is an :class:`OrderBy` value, *default* when absent.

    The bare field names are never accepted from callers; ``updatedAt`` is
    only ever the fallback.
    """
    if order_by is None:
        return default
    if order_by not in _ORDER_BY_VALUES:
        allowed = ", ".join(o.value for o in OrderBy)
        msg = f"Invalid orderBy {order_by!r}. Supported values: {allowed}"
        raise ValidationError(msg)
    return OrderBy(order_by).value


class IssueService(BaseService):
    """Issue operations, routed by cardinality."""

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @traced
    async def create_issue(self, payload: Mapping[str, Any]) -> ServiceResult:
        """Create a single issue via the single-entity operation."""
        op = "create_issue"
        try:
            payload = self._require_mapping(payload, "issue")
            self._validate(payload, required=ISSUE_REQUIRED)
            data = await self.router.create_one(Entity.ISSUE, normalize_payload(payload))
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def create_issues(self, issues: Any) -> ServiceResult:
        """Create every issue in one batch call, however many there are."""
        op = "create_issues"
        try:
            self._validate({"issues": issues}, required=("issues",), lists=("issues",))
            payloads = []
            for index, issue in enumerate(issues):
                item = self._require_mapping(issue, f"issues[{index}]")
                self._validate(item, required=ISSUE_REQUIRED)
                payloads.append(normalize_payload(item))
            data = await self.router.create_many(Entity.ISSUE, payloads)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @traced
    async def bulk_update_issues(self, issue_ids: Any, update: Any) -> ServiceResult:
        """Apply one update to one or many issues.

        One id uses the single update operation; two or more use the batch
        update.  ``meta["count"]`` reports how many ids were targeted.
        """
        op = "bulk_update_issues"
        try:
            self._validate(
                {"issueIds": issue_ids, "update": update},
                required=("issueIds", "update"),
                lists=("issueIds",),
            )
            changes = normalize_payload(self._require_mapping(update, "update"))
            data = await self.router.update(Entity.ISSUE, list(issue_ids), changes)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data, meta={"count": len(issue_ids)})

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @traced
    async def search_issues(
        self,
        *,
        query: str | None = None,
        filter: Mapping[str, Any] | None = None,  # noqa: A002
        team_ids: Any = None,
        assignee_ids: Any = None,
        states: Any = None,
        priority: Any = None,
        first: int | None = None,
        after: str | None = None,
        order_by: str | None = None,
    ) -> ServiceResult:
        """Search issues. ``pageInfo.endCursor`` comes back exactly as sent."""
        op = "search_issues"
        try:
            self._validate(
                {"teamIds": team_ids, "assigneeIds": assignee_ids, "states": states},
                lists=("teamIds", "assigneeIds", "states"),
            )
            criteria = _issue_criteria(
                query=query,
                filter=filter,
                team_ids=team_ids,
                assignee_ids=assignee_ids,
                states=states,
                priority=priority,
            )
            data = await self.router.search(
                Entity.ISSUE,
                criteria,
                first=first or DEFAULT_PAGE_SIZE,
                after=after,
                order_by=validate_order_by(order_by),
            )
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @traced
    async def delete_issue(self, issue_id: str | None) -> ServiceResult:
        """Delete one issue via the single delete operation."""
        op = "delete_issue"
        try:
            self._validate({"id": issue_id}, required=("id",))
            assert issue_id is not None
            data = await self.router.delete(Entity.ISSUE, str(issue_id))
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data, meta={"ids": [issue_id]})

    @traced
    async def delete_issues(self, ids: Any) -> ServiceResult:
        """Delete every id in one batch call, even when there is only one."""
        op = "delete_issues"
        try:
            self._validate({"ids": ids}, required=("ids",), lists=("ids",))
            data = await self.router.delete(Entity.ISSUE, [str(i) for i in ids])
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data, meta={"ids": list(ids)})


def _issue_criteria(**inputs: Any) -> FilterCriteria:
    try:
        return build_issue_filter(**inputs)
    except pydantic.ValidationError as exc:
        msg = f"Invalid search filter: {exc.errors()[0]['msg']}"
        raise ValidationError(msg) from exc
