"""Tests for composite operations and their three-state outcome."""

from __future__ import annotations

from typing import Any

from linearctl.errors import TransportError
from linearctl.services.composite import CompositeOrchestrator, CompositeStatus
from linearctl.services.router import OperationRouter

PROJECT_OK = {"projectCreate": {"success": True, "project": {"id": "p1", "name": "Q1"}}}
ISSUES_OK = {
    "issueBatchCreate": {"success": True, "issues": [{"id": "i1"}, {"id": "i2"}]}
}


def _orchestrator(transport: Any) -> CompositeOrchestrator:
    return CompositeOrchestrator(OperationRouter(transport))


class TestProjectWithIssues:
    async def test_completed(self, transport: Any) -> None:
        transport.queue(PROJECT_OK, ISSUES_OK)
        outcome = await _orchestrator(transport).create_project_with_issues(
            {"name": "Q1", "teamIds": ["t1"]},
            [{"title": "a"}, {"title": "b"}],
        )
        assert outcome.status is CompositeStatus.COMPLETED
        assert outcome.ok
        assert outcome.committed == ["project", "issues"]
        assert transport.operations == ["CreateProject", "CreateBatchIssues"]

    async def test_issues_get_the_new_project_id(self, transport: Any) -> None:
        transport.queue(PROJECT_OK, ISSUES_OK)
        issues = [{"title": "a"}, {"title": "b"}]
        await _orchestrator(transport).create_project_with_issues({"name": "Q1"}, issues)
        sent = transport.variables[1]["input"]["issues"]
        assert sent == [{"title": "a", "projectId": "p1"}, {"title": "b", "projectId": "p1"}]
        assert issues == [{"title": "a"}, {"title": "b"}]

    async def test_merged_data(self, transport: Any) -> None:
        transport.queue(PROJECT_OK, ISSUES_OK)
        outcome = await _orchestrator(transport).create_project_with_issues({"name": "Q1"}, [{}])
        merged = outcome.merged_data()
        assert merged["projectCreate"]["project"]["id"] == "p1"
        assert len(merged["issueBatchCreate"]["issues"]) == 2

    async def test_project_step_fails(self, transport: Any) -> None:
        transport.queue({"projectCreate": {"success": False, "project": None}})
        outcome = await _orchestrator(transport).create_project_with_issues(
            {"name": "Q1"}, [{"title": "a"}]
        )
        assert outcome.status is CompositeStatus.FIRST_STEP_FAILED
        assert outcome.failed_step == "project"
        assert outcome.reason == "Failed to create project"
        assert outcome.committed == []
        assert len(transport.calls) == 1

    async def test_issues_step_fails_leaves_project(self, transport: Any) -> None:
        transport.queue(PROJECT_OK, TransportError("rate limited"))
        outcome = await _orchestrator(transport).create_project_with_issues(
            {"name": "Q1"}, [{"title": "a"}]
        )
        assert outcome.status is CompositeStatus.PARTIAL
        assert outcome.failed_step == "issues"
        assert outcome.committed == ["project"]
        assert outcome.reason == "Failed to create issues: operation failed: rate limited"
        assert len(transport.calls) == 2
        assert outcome.merged_data() == PROJECT_OK


class TestProjectMilestones:
    @staticmethod
    def _created(mid: str) -> dict[str, Any]:
        return {"projectMilestoneCreate": {"success": True, "projectMilestone": {"id": mid}}}

    async def test_sequential_creates(self, transport: Any) -> None:
        transport.queue(self._created("m1"), self._created("m2"))
        outcome = await _orchestrator(transport).create_project_milestones(
            "p1", [{"name": "Alpha"}, {"name": "Beta"}]
        )
        assert outcome.ok
        assert transport.operations == ["CreateProjectMilestone", "CreateProjectMilestone"]
        assert [v["input"] for v in transport.variables] == [
            {"name": "Alpha", "projectId": "p1"},
            {"name": "Beta", "projectId": "p1"},
        ]

    async def test_stops_at_first_failure(self, transport: Any) -> None:
        transport.queue(
            self._created("m1"),
            {"projectMilestoneCreate": {"success": False, "projectMilestone": None}},
        )
        outcome = await _orchestrator(transport).create_project_milestones(
            "p1", [{"name": "A"}, {"name": "B"}, {"name": "C"}]
        )
        assert outcome.status is CompositeStatus.PARTIAL
        assert outcome.failed_step == "milestone[1]"
        assert outcome.committed == ["milestone[0]"]
        assert len(transport.calls) == 2

    async def test_first_milestone_fails(self, transport: Any) -> None:
        transport.queue(TransportError("boom"))
        outcome = await _orchestrator(transport).create_project_milestones("p1", [{"name": "A"}])
        assert outcome.status is CompositeStatus.FIRST_STEP_FAILED
        assert outcome.reason == "Failed to create project milestone: operation failed: boom"


class TestCreatedProjectWithoutId:
    async def test_missing_id_fails_project_step(self, transport: Any) -> None:
        transport.queue({"projectCreate": {"success": True, "project": {"name": "Q1"}}})
        outcome = await _orchestrator(transport).create_project_with_issues(
            {"name": "Q1"}, [{"title": "a"}]
        )
        assert outcome.status is CompositeStatus.FIRST_STEP_FAILED
        assert outcome.failed_step == "project"
        assert outcome.reason == "Failed to create project: projectCreate returned no project id"
        assert transport.operations == ["CreateProject"]
