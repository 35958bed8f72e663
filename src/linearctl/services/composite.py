"""Composite operations — several router calls in strict sequence.

The backend has no cross-entity transaction, so a composite can end in
three ways, reported as :class:`CompositeStatus`:

* ``completed`` — every step succeeded.
* ``first_step_failed`` — nothing was persisted.
* ``partial`` — at least one step committed before a later one failed.
  Committed artifacts stay in the backend; nothing is rolled back.

Steps never run concurrently: later steps consume ids produced earlier.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any

import structlog
from pydantic import BaseModel, Field

from linearctl.domain.types import Entity
from linearctl.errors import UpstreamError
from linearctl.services.router import OperationRouter

logger = structlog.get_logger(__name__)


class CompositeStatus(StrEnum):
    COMPLETED = "completed"
    FIRST_STEP_FAILED = "first_step_failed"
    PARTIAL = "partial"


class StepResult(BaseModel):
    """One step of a composite: its name, and either its data or its error."""

    model_config = {"frozen": True}

    step: str
    ok: bool
    data: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None


class CompositeResult(BaseModel):
    """Tagged outcome of a composite operation."""

    model_config = {"frozen": True}

    status: CompositeStatus
    steps: list[StepResult] = Field(default_factory=list)
    failed_step: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is CompositeStatus.COMPLETED

    @property
    def committed(self) -> list[str]:
        """Names of the steps whose effects persist in the backend."""
        return [s.step for s in self.steps if s.ok]

    def merged_data(self) -> dict[str, Any]:
        """Data payloads of the successful steps, merged in step order."""
        merged: dict[str, Any] = {}
        for step in self.steps:
            if step.ok:
                merged.update(step.data)
        return merged


def _reason(action: str, exc: UpstreamError) -> str:
    """``"Failed to <action>"``, echoing the cause when it says more."""
    base = f"Failed to {action}"
    if exc.message == base:
        return base
    return f"{base}: {exc.message}"


def _created_id(data: Mapping[str, Any], result_field: str, entity_field: str) -> str:
    """Id of the entity a create reported, or :class:`UpstreamError` if it has none."""
    result = data.get(result_field)
    entity = result.get(entity_field) if isinstance(result, Mapping) else None
    entity_id = entity.get("id") if isinstance(entity, Mapping) else None
    if not entity_id:
        msg = f"{result_field} returned no {entity_field} id"
        raise UpstreamError(msg, detail={"result_field": result_field})
    return str(entity_id)


def _failed(
    steps: list[StepResult], step: str, action: str, exc: UpstreamError
) -> CompositeResult:
    reason = _reason(action, exc)
    status = CompositeStatus.PARTIAL if steps else CompositeStatus.FIRST_STEP_FAILED
    logger.warning("composite.failed", step=step, status=status.value, reason=reason)
    return CompositeResult(
        status=status,
        steps=[*steps, StepResult(step=step, ok=False, error=exc.message)],
        failed_step=step,
        reason=reason,
    )


class CompositeOrchestrator:
    """Sequences router calls for multi-entity intents."""

    def __init__(self, router: OperationRouter) -> None:
        self._router = router

    async def create_project_with_issues(
        self,
        project: Mapping[str, Any],
        issues: Sequence[Mapping[str, Any]],
    ) -> CompositeResult:
        """Create *project*, then batch-create *issues* inside it.

        Every issue payload gets the new project's ``projectId``; the
        caller's mappings are not modified.
        """
        steps: list[StepResult] = []

        try:
            project_data = await self._router.create_one(Entity.PROJECT, project)
            project_id = _created_id(project_data, "projectCreate", "project")
        except UpstreamError as exc:
            return _failed(steps, "project", "create project", exc)
        steps.append(StepResult(step="project", ok=True, data=project_data))

        scoped = [{**issue, "projectId": project_id} for issue in issues]

        try:
            issues_data = await self._router.create_many(Entity.ISSUE, scoped)
        except UpstreamError as exc:
            return _failed(steps, "issues", "create issues", exc)
        steps.append(StepResult(step="issues", ok=True, data=issues_data))

        return CompositeResult(status=CompositeStatus.COMPLETED, steps=steps)

    async def create_project_milestones(
        self,
        project_id: str,
        milestones: Sequence[Mapping[str, Any]],
    ) -> CompositeResult:
        """Create each milestone in order under *project_id*; stop at the first failure."""
        steps: list[StepResult] = []
        for index, milestone in enumerate(milestones):
            step = f"milestone[{index}]"
            payload = {**milestone, "projectId": project_id}
            try:
                data = await self._router.create_one(Entity.MILESTONE, payload)
            except UpstreamError as exc:
                return _failed(steps, step, "create project milestone", exc)
            steps.append(StepResult(step=step, ok=True, data=data))
        return CompositeResult(status=CompositeStatus.COMPLETED, steps=steps)
