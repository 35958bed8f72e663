"""Tests for TeamService and UserService."""

from __future__ import annotations

from typing import Any

from linearctl.infrastructure.session import LinearSession
from linearctl.services.teams import TeamService
from linearctl.services.users import UserService


class TestTeams:
    async def test_get_teams(self, session: LinearSession, transport: Any) -> None:
        teams = {"teams": {"nodes": [{"id": "t1", "name": "Engineering", "key": "ENG"}]}}
        transport.queue(teams)
        result = await TeamService(session).get_teams()
        assert result.ok
        assert result.data == teams
        assert transport.operations == ["GetTeams"]

    async def test_create_labels_one_call(self, session: LinearSession, transport: Any) -> None:
        transport.queue(
            {"issueLabelCreate": {"success": True, "issueLabels": [{"id": "l1"}, {"id": "l2"}]}}
        )
        labels = [{"name": "bug", "teamId": "t1"}, {"name": "ux", "teamId": "t1", "color": "#f00"}]
        result = await TeamService(session).create_issue_labels(labels)
        assert result.ok
        assert transport.operations == ["CreateIssueLabels"]
        assert transport.variables == [{"labels": labels}]
        assert result.meta == {"count": 2}

    async def test_labels_need_team(self, session: LinearSession, transport: Any) -> None:
        result = await TeamService(session).create_issue_labels([{"name": "bug"}])
        assert result.error is not None
        assert result.error.message == "Missing required parameters: teamId"
        assert transport.calls == []

    async def test_label_failure(self, session: LinearSession, transport: Any) -> None:
        transport.queue({"issueLabelCreate": {"success": False}})
        result = await TeamService(session).create_issue_labels([{"name": "bug", "teamId": "t1"}])
        assert result.error is not None
        assert result.error.message == "Failed to create issue labels"


class TestUsers:
    async def test_current_user(self, session: LinearSession, transport: Any) -> None:
        transport.queue({"viewer": {"id": "u1", "name": "Ada", "email": "ada@example.com"}})
        result = await UserService(session).get_current_user()
        assert result.ok
        assert result.data["viewer"]["name"] == "Ada"
        assert transport.operations == ["GetUser"]

    async def test_unauthenticated(self, unauthenticated_session: LinearSession) -> None:
        result = await UserService(unauthenticated_session).get_current_user()
        assert result.error is not None
        assert result.error.code == "AUTH_REQUIRED"
