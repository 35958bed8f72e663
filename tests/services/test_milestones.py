"""Tests for MilestoneService."""

from __future__ import annotations

from typing import Any

from linearctl.infrastructure.session import LinearSession
from linearctl.services.milestones import MilestoneService


def _created(mid: str, name: str) -> dict[str, Any]:
    return {
        "projectMilestoneCreate": {
            "success": True,
            "projectMilestone": {"id": mid, "name": name},
        }
    }


class TestSingleMilestone:
    async def test_create(self, session: LinearSession, transport: Any) -> None:
        transport.queue(_created("m1", "Beta"))
        result = await MilestoneService(session).create_project_milestone(
            {"name": "Beta", "projectId": "p1", "targetDate": "2025-06-01"}
        )
        assert result.ok
        assert transport.operations == ["CreateProjectMilestone"]
        assert transport.variables[0]["input"]["targetDate"] == "2025-06-01"

    async def test_create_requires_project(self, session: LinearSession, transport: Any) -> None:
        result = await MilestoneService(session).create_project_milestone({"name": "Beta"})
        assert result.error is not None
        assert result.error.message == "Missing required parameters: projectId"
        assert transport.calls == []

    async def test_update(self, session: LinearSession, transport: Any) -> None:
        transport.queue(
            {"projectMilestoneUpdate": {"success": True, "projectMilestone": {"id": "m1"}}}
        )
        result = await MilestoneService(session).update_project_milestone(
            "m1", {"name": "GA", "description": None}
        )
        assert result.ok
        assert transport.operations == ["UpdateProjectMilestone"]
        assert transport.variables == [{"id": "m1", "input": {"name": "GA"}}]

    async def test_update_requires_id(self, session: LinearSession) -> None:
        result = await MilestoneService(session).update_project_milestone(None, {"name": "GA"})
        assert result.error is not None
        assert result.error.message == "Missing required parameters: id"

    async def test_update_failure_message(self, session: LinearSession, transport: Any) -> None:
        transport.queue({"projectMilestoneUpdate": {"success": False}})
        result = await MilestoneService(session).update_project_milestone("m1", {"name": "GA"})
        assert result.error is not None
        assert result.error.message == "Failed to update project milestone"

    async def test_delete(self, session: LinearSession, transport: Any) -> None:
        transport.queue({"projectMilestoneDelete": {"success": True}})
        result = await MilestoneService(session).delete_project_milestone("m1")
        assert result.ok
        assert transport.operations == ["DeleteProjectMilestone"]
        assert transport.variables == [{"id": "m1"}]

    async def test_get(self, session: LinearSession, transport: Any) -> None:
        transport.queue({"projectMilestone": {"id": "m1"}})
        result = await MilestoneService(session).get_project_milestone("m1")
        assert result.data == {"projectMilestone": {"id": "m1"}}


class TestMilestoneSearch:
    @staticmethod
    def _page() -> dict[str, Any]:
        return {"projectMilestones": {"nodes": [], "pageInfo": {"hasNextPage": False}}}

    async def test_search_all_filters(self, session: LinearSession, transport: Any) -> None:
        transport.queue(self._page())
        result = await MilestoneService(session).search_project_milestones(
            name="Beta",
            project_id="p1",
            target_date="2025-06-01",
            first=10,
            after="c1",
            order_by="createdAt_DESC",
        )
        assert result.ok
        assert transport.variables == [
            {
                "filter": {
                    "name": {"eq": "Beta"},
                    "project": {"id": {"eq": "p1"}},
                    "targetDate": {"eq": "2025-06-01"},
                },
                "first": 10,
                "after": "c1",
                "orderBy": "createdAt_DESC",
            }
        ]

    async def test_search_defaults(self, session: LinearSession, transport: Any) -> None:
        transport.queue(self._page())
        await MilestoneService(session).search_project_milestones()
        assert transport.variables == [
            {"filter": {}, "first": 50, "after": None, "orderBy": "updatedAt"}
        ]

    async def test_project_milestones(self, session: LinearSession, transport: Any) -> None:
        transport.queue(self._page())
        await MilestoneService(session).get_project_milestones("p1", first=20)
        assert transport.operations == ["SearchProjectMilestones"]
        assert transport.variables[0]["filter"] == {"project": {"id": {"eq": "p1"}}}
        assert transport.variables[0]["first"] == 20

    async def test_project_milestones_requires_project(
        self, session: LinearSession, transport: Any
    ) -> None:
        result = await MilestoneService(session).get_project_milestones(None)
        assert result.error is not None
        assert result.error.message == "Missing required parameters: projectId"
        assert transport.calls == []


class TestCreateProjectMilestones:
    async def test_creates_in_order(self, session: LinearSession, transport: Any) -> None:
        transport.queue(_created("m1", "Alpha"), _created("m2", "Beta"))
        result = await MilestoneService(session).create_project_milestones(
            "p1", [{"name": "Alpha"}, {"name": "Beta", "sortOrder": 2}]
        )
        assert result.ok
        assert result.data == {
            "projectMilestones": [{"id": "m1", "name": "Alpha"}, {"id": "m2", "name": "Beta"}]
        }
        assert result.meta is not None
        assert result.meta["count"] == 2
        assert [v["input"]["name"] for v in transport.variables] == ["Alpha", "Beta"]

    async def test_partial_failure(self, session: LinearSession, transport: Any) -> None:
        transport.queue(_created("m1", "Alpha"), {"projectMilestoneCreate": {"success": False}})
        result = await MilestoneService(session).create_project_milestones(
            "p1", [{"name": "Alpha"}, {"name": "Beta"}, {"name": "Gamma"}]
        )
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "COMPOSITE_FAILED"
        assert result.error.detail == {
            "status": "partial",
            "failed_step": "milestone[1]",
            "committed": ["milestone[0]"],
        }
        assert len(transport.calls) == 2

    async def test_each_needs_a_name(self, session: LinearSession, transport: Any) -> None:
        result = await MilestoneService(session).create_project_milestones(
            "p1", [{"name": "Alpha"}, {"description": "nameless"}]
        )
        assert result.error is not None
        assert result.error.message == "Missing required parameters: name"
        assert transport.calls == []

    async def test_milestones_must_be_list(self, session: LinearSession) -> None:
        result = await MilestoneService(session).create_project_milestones("p1", {"name": "A"})
        assert result.error is not None
        assert result.error.message == "milestones parameter must be an array"
