"""ProjectService — project lookup and the project-with-issues composite."""

from __future__ import annotations

from typing import Any

from linearctl.domain.filters import build_project_filter
from linearctl.domain.normalize import normalize_payload
from linearctl.domain.types import Entity
from linearctl.errors import CompositeError, LinearctlError
from linearctl.services.base import BaseService
from linearctl.services.composite import CompositeOrchestrator, CompositeResult
from linearctl.services.issues import ISSUE_REQUIRED
from linearctl.services.result import ServiceResult
from linearctl.services.telemetry import traced

PROJECT_REQUIRED = ("name", "teamIds")


def composite_error(outcome: CompositeResult) -> CompositeError:
    """Wrap a failed composite outcome for the service boundary.

    The message names only the failed step; ``detail`` carries the tagged
    status and the committed steps for callers that inspect it.
    """
    return CompositeError(
        outcome.reason or f"Failed at step {outcome.failed_step}",
        outcome=outcome,
        detail={
            "status": outcome.status.value,
            "failed_step": outcome.failed_step,
            "committed": outcome.committed,
        },
    )


class ProjectService(BaseService):
    """Project reads and composite project creation."""

    @traced
    async def create_project_with_issues(self, project: Any, issues: Any) -> ServiceResult:
        """Create a project, then its issues in one batch call.

        If the issues step fails the project already exists and stays.
        """
        op = "create_project_with_issues"
        try:
            self._validate(
                {"project": project, "issues": issues},
                required=("project", "issues"),
                lists=("issues",),
            )
            project = self._require_mapping(project, "project")
            self._validate(project, required=PROJECT_REQUIRED, lists=("teamIds",))
            payloads = []
            for index, issue in enumerate(issues):
                item = self._require_mapping(issue, f"issues[{index}]")
                self._validate(item, required=ISSUE_REQUIRED)
                payloads.append(normalize_payload(item))

            orchestrator = CompositeOrchestrator(self.router)
            outcome = await orchestrator.create_project_with_issues(
                normalize_payload(project), payloads
            )
            if not outcome.ok:
                raise composite_error(outcome)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data=outcome.merged_data(),
            meta={"status": outcome.status.value},
        )

    @traced
    async def get_project(self, project_id: str | None) -> ServiceResult:
        op = "get_project"
        try:
            self._validate({"id": project_id}, required=("id",))
            data = await self.router.get(Entity.PROJECT, id=project_id)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def search_projects(self, name: str | None) -> ServiceResult:
        """Find projects whose name matches *name* exactly."""
        op = "search_projects"
        try:
            self._validate({"name": name}, required=("name",))
            assert name is not None
            data = await self.router.find(Entity.PROJECT, build_project_filter(name=name))
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)
