"""MilestoneService — project milestone CRUD, search, and sequential creation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from linearctl.domain.filters import build_milestone_filter
from linearctl.domain.normalize import normalize_payload
from linearctl.domain.types import Entity
from linearctl.errors import LinearctlError
from linearctl.services.base import BaseService
from linearctl.services.composite import CompositeOrchestrator
from linearctl.services.issues import validate_order_by
from linearctl.services.projects import composite_error
from linearctl.services.result import ServiceResult
from linearctl.services.router import DEFAULT_PAGE_SIZE
from linearctl.services.telemetry import traced

MILESTONE_REQUIRED = ("name", "projectId")


class MilestoneService(BaseService):
    """Project milestone operations. All are single-entity except the composite."""

    @traced
    async def create_project_milestone(self, payload: Any) -> ServiceResult:
        op = "create_project_milestone"
        try:
            payload = self._require_mapping(payload, "milestone")
            self._validate(payload, required=MILESTONE_REQUIRED)
            data = await self.router.create_one(Entity.MILESTONE, normalize_payload(payload))
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def update_project_milestone(
        self, milestone_id: str | None, update: Mapping[str, Any] | None = None
    ) -> ServiceResult:
        """Update one milestone; absent fields are left untouched."""
        op = "update_project_milestone"
        try:
            self._validate({"id": milestone_id}, required=("id",))
            assert milestone_id is not None
            changes = normalize_payload(self._require_mapping(update or {}, "update"))
            data = await self.router.update(Entity.MILESTONE, [milestone_id], changes)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def delete_project_milestone(self, milestone_id: str | None) -> ServiceResult:
        op = "delete_project_milestone"
        try:
            self._validate({"id": milestone_id}, required=("id",))
            assert milestone_id is not None
            data = await self.router.delete(Entity.MILESTONE, str(milestone_id))
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def get_project_milestone(self, milestone_id: str | None) -> ServiceResult:
        op = "get_project_milestone"
        try:
            self._validate({"id": milestone_id}, required=("id",))
            data = await self.router.get(Entity.MILESTONE, id=milestone_id)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def search_project_milestones(
        self,
        *,
        name: str | None = None,
        project_id: str | None = None,
        target_date: str | None = None,
        first: int | None = None,
        after: str | None = None,
        order_by: str | None = None,
    ) -> ServiceResult:
        """Search milestones by any combination of name, project and target date."""
        op = "search_project_milestones"
        try:
            data = await self._search(
                name=name,
                project_id=project_id,
                target_date=target_date,
                first=first,
                after=after,
                order_by=order_by,
            )
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def get_project_milestones(
        self,
        project_id: str | None,
        *,
        first: int | None = None,
        after: str | None = None,
        order_by: str | None = None,
    ) -> ServiceResult:
        """All milestones of one project, one page at a time."""
        op = "get_project_milestones"
        try:
            self._validate({"projectId": project_id}, required=("projectId",))
            data = await self._search(
                project_id=project_id, first=first, after=after, order_by=order_by
            )
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def create_project_milestones(
        self, project_id: str | None, milestones: Any
    ) -> ServiceResult:
        """Create several milestones under one project, in order.

        A failure stops the sequence; milestones created before it stay and
        are listed in the error detail's ``committed`` steps.
        """
        op = "create_project_milestones"
        try:
            self._validate(
                {"projectId": project_id, "milestones": milestones},
                required=("projectId", "milestones"),
                lists=("milestones",),
            )
            assert project_id is not None
            payloads = []
            for index, milestone in enumerate(milestones):
                item = self._require_mapping(milestone, f"milestones[{index}]")
                self._validate(item, required=("name",))
                payloads.append(normalize_payload(item))

            orchestrator = CompositeOrchestrator(self.router)
            outcome = await orchestrator.create_project_milestones(project_id, payloads)
            if not outcome.ok:
                raise composite_error(outcome)
        except LinearctlError as exc:
            return self._fail(op, exc)
        created = [
            step.data["projectMilestoneCreate"]["projectMilestone"] for step in outcome.steps
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"projectMilestones": created},
            meta={"status": outcome.status.value, "count": len(created)},
        )

    async def _search(
        self,
        *,
        name: str | None = None,
        project_id: str | None = None,
        target_date: str | None = None,
        first: int | None = None,
        after: str | None = None,
        order_by: str | None = None,
    ) -> dict[str, Any]:
        criteria = build_milestone_filter(
            name=name, project_id=project_id, target_date=target_date
        )
        return await self.router.search(
            Entity.MILESTONE,
            criteria,
            first=first or DEFAULT_PAGE_SIZE,
            after=after,
            order_by=validate_order_by(order_by),
        )
