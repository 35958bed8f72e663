"""MCP tool definitions — 22 tools across 6 categories.

Categories: Discovery (1), Issues (7), Projects (3), Milestones (7),
Comments (2), Workspace (3).  The project-with-issues composite is listed
under both Issues and Projects.
Each tool has a ``*_impl`` coroutine testable without the mcp package.
``register_tools()`` wraps them with FastMCP decorators under the
``linear_*`` names clients already know.

Tool arguments keep the backend's camelCase field names, so the
registered wrappers use camelCase parameters.
"""

# ruff: noqa: N803

from __future__ import annotations

from typing import Any

from linearctl.domain.types import OrderBy
from linearctl.errors import ValidationError
from linearctl.services.comments import CommentService
from linearctl.services.issues import IssueService
from linearctl.services.milestones import MilestoneService
from linearctl.services.projects import ProjectService
from linearctl.services.result import ServiceResult
from linearctl.services.teams import TeamService
from linearctl.services.users import UserService


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.meta:
        response["meta"] = result.meta
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
        if result.error.detail:
            response["error"]["detail"] = result.error.detail
    return response


def _present(**fields: Any) -> dict[str, Any]:
    """Keep only the fields the caller actually supplied."""
    return {key: value for key, value in fields.items() if value is not None}


# ---------------------------------------------------------------------------
# Discovery (1)
# ---------------------------------------------------------------------------

TOOL_CATALOG: dict[str, dict[str, Any]] = {
    "discovery": {
        "description": "Find out which tools exist.",
        "tools": {
            "discover_tools": "List the available tools, grouped by category.",
        },
    },
    "issues": {
        "description": "Create, update, search, and delete issues.",
        "tools": {
            "linear_create_issue": "Create a new issue.",
            "linear_create_issues": "Create several issues in one batch call.",
            "linear_create_project_with_issues": "Create a project, then its issues.",
            "linear_bulk_update_issues": "Apply one update to one or many issues.",
            "linear_search_issues": "Search issues with filters and pagination.",
            "linear_delete_issue": "Delete one issue.",
            "linear_delete_issues": "Delete several issues in one batch call.",
        },
    },
    "projects": {
        "description": "Look up projects.",
        "tools": {
            "linear_get_project": "Get a project by id.",
            "linear_search_projects": "Find projects by exact name.",
            "linear_create_project_with_issues": "Create a project, then its issues.",
        },
    },
    "milestones": {
        "description": "Manage project milestones.",
        "tools": {
            "linear_create_project_milestone": "Create a project milestone.",
            "linear_update_project_milestone": "Update a project milestone.",
            "linear_delete_project_milestone": "Delete a project milestone.",
            "linear_get_project_milestone": "Get a project milestone by id.",
            "linear_search_project_milestones": "Search milestones by name, project, date.",
            "linear_get_project_milestones": "List the milestones of one project.",
            "linear_create_project_milestones": "Create several milestones in order.",
        },
    },
    "comments": {
        "description": "Read and post issue comments.",
        "tools": {
            "linear_get_issue_comments": "Get one page of an issue's comments.",
            "linear_create_comment": "Comment on an issue or reply to a comment.",
        },
    },
    "workspace": {
        "description": "Teams, labels, and the current user.",
        "tools": {
            "linear_get_teams": "Get all teams with their states and labels.",
            "linear_get_user": "Get the authenticated user and their teams.",
            "linear_create_issue_labels": "Create issue labels in one call.",
        },
    },
}


def discover_tools_impl(session: Any, *, category: str | None = None) -> dict[str, Any]:
    """Return the tool catalog, optionally restricted to one category."""
    op = "discover_tools"
    if category is not None and category not in TOOL_CATALOG:
        exc = ValidationError(
            f"Unknown category {category!r}. Available: {', '.join(TOOL_CATALOG)}"
        )
        return _to_mcp_response(ServiceResult.failure(op, exc))

    selected = [category] if category is not None else list(TOOL_CATALOG)
    categories = [
        {
            "name": name,
            "description": TOOL_CATALOG[name]["description"],
            "tools": [
                {"name": tool, "description": summary}
                for tool, summary in TOOL_CATALOG[name]["tools"].items()
            ],
        }
        for name in selected
    ]
    count = len({tool["name"] for entry in categories for tool in entry["tools"]})
    result = ServiceResult(ok=True, op=op, data={"count": count, "categories": categories})
    return _to_mcp_response(result)


# ---------------------------------------------------------------------------
# Issues (7)
# ---------------------------------------------------------------------------


async def create_issue_impl(session: Any, issue: dict[str, Any]) -> dict[str, Any]:
    """Create a new issue."""
    return _to_mcp_response(await IssueService(session).create_issue(issue))


async def create_issues_impl(session: Any, issues: Any) -> dict[str, Any]:
    """Create several issues in one batch call."""
    return _to_mcp_response(await IssueService(session).create_issues(issues))


async def create_project_with_issues_impl(
    session: Any, project: Any, issues: Any
) -> dict[str, Any]:
    """Create a project, then its issues."""
    result = await ProjectService(session).create_project_with_issues(project, issues)
    return _to_mcp_response(result)


async def bulk_update_issues_impl(
    session: Any, issue_ids: Any, update: Any
) -> dict[str, Any]:
    """Apply one update to every listed issue."""
    result = await IssueService(session).bulk_update_issues(issue_ids, update)
    return _to_mcp_response(result)


async def search_issues_impl(
    session: Any,
    *,
    query: str | None = None,
    filter: dict[str, Any] | None = None,  # noqa: A002
    team_ids: list[str] | None = None,
    assignee_ids: list[str] | None = None,
    states: list[str] | None = None,
    priority: Any = None,
    first: int | None = None,
    after: str | None = None,
    order_by: str | None = None,
) -> dict[str, Any]:
    """Search issues."""
    result = await IssueService(session).search_issues(
        query=query,
        filter=filter,
        team_ids=team_ids,
        assignee_ids=assignee_ids,
        states=states,
        priority=priority,
        first=first,
        after=after,
        order_by=order_by,
    )
    return _to_mcp_response(result)


async def delete_issue_impl(session: Any, issue_id: str | None) -> dict[str, Any]:
    """Delete one issue."""
    return _to_mcp_response(await IssueService(session).delete_issue(issue_id))


async def delete_issues_impl(session: Any, ids: Any) -> dict[str, Any]:
    """Delete several issues in one call."""
    return _to_mcp_response(await IssueService(session).delete_issues(ids))


# ---------------------------------------------------------------------------
# Projects (2)
# ---------------------------------------------------------------------------


async def get_project_impl(session: Any, project_id: str | None) -> dict[str, Any]:
    """Get a project by id."""
    return _to_mcp_response(await ProjectService(session).get_project(project_id))


async def search_projects_impl(session: Any, name: str | None) -> dict[str, Any]:
    """Find projects by exact name."""
    return _to_mcp_response(await ProjectService(session).search_projects(name))


# ---------------------------------------------------------------------------
# Milestones (7)
# ---------------------------------------------------------------------------


async def create_project_milestone_impl(
    session: Any, milestone: dict[str, Any]
) -> dict[str, Any]:
    """Create a project milestone."""
    result = await MilestoneService(session).create_project_milestone(milestone)
    return _to_mcp_response(result)


async def update_project_milestone_impl(
    session: Any, milestone_id: str | None, update: dict[str, Any]
) -> dict[str, Any]:
    """Update a project milestone."""
    result = await MilestoneService(session).update_project_milestone(milestone_id, update)
    return _to_mcp_response(result)


async def delete_project_milestone_impl(
    session: Any, milestone_id: str | None
) -> dict[str, Any]:
    """Delete a project milestone."""
    result = await MilestoneService(session).delete_project_milestone(milestone_id)
    return _to_mcp_response(result)


async def get_project_milestone_impl(session: Any, milestone_id: str | None) -> dict[str, Any]:
    """Get a project milestone by id."""
    result = await MilestoneService(session).get_project_milestone(milestone_id)
    return _to_mcp_response(result)


async def search_project_milestones_impl(
    session: Any,
    *,
    name: str | None = None,
    project_id: str | None = None,
    target_date: str | None = None,
    first: int | None = None,
    after: str | None = None,
    order_by: str | None = None,
) -> dict[str, Any]:
    """Search project milestones."""
    result = await MilestoneService(session).search_project_milestones(
        name=name,
        project_id=project_id,
        target_date=target_date,
        first=first,
        after=after,
        order_by=order_by,
    )
    return _to_mcp_response(result)


async def get_project_milestones_impl(
    session: Any,
    project_id: str | None,
    *,
    first: int | None = None,
    after: str | None = None,
    order_by: str | None = None,
) -> dict[str, Any]:
    """List one project's milestones."""
    result = await MilestoneService(session).get_project_milestones(
        project_id, first=first, after=after, order_by=order_by
    )
    return _to_mcp_response(result)


async def create_project_milestones_impl(
    session: Any, project_id: str | None, milestones: Any
) -> dict[str, Any]:
    """Create several milestones in order."""
    result = await MilestoneService(session).create_project_milestones(project_id, milestones)
    return _to_mcp_response(result)


# ---------------------------------------------------------------------------
# Comments (2)
# ---------------------------------------------------------------------------


async def get_issue_comments_impl(
    session: Any,
    issue_id: str | None,
    *,
    first: int | None = None,
    after: str | None = None,
    include_archived: bool | None = None,
) -> dict[str, Any]:
    """Get one page of an issue's comments."""
    result = await CommentService(session).get_issue_comments(
        issue_id, first=first, after=after, include_archived=include_archived
    )
    return _to_mcp_response(result)


async def create_comment_impl(session: Any, comment: dict[str, Any]) -> dict[str, Any]:
    """Post a comment."""
    return _to_mcp_response(await CommentService(session).create_comment(comment))


# ---------------------------------------------------------------------------
# Workspace (3)
# ---------------------------------------------------------------------------


async def get_teams_impl(session: Any) -> dict[str, Any]:
    """Get all teams."""
    return _to_mcp_response(await TeamService(session).get_teams())


async def get_user_impl(session: Any) -> dict[str, Any]:
    """Get the authenticated user."""
    return _to_mcp_response(await UserService(session).get_current_user())


async def create_issue_labels_impl(session: Any, labels: Any) -> dict[str, Any]:
    """Create issue labels."""
    return _to_mcp_response(await TeamService(session).create_issue_labels(labels))


# ---------------------------------------------------------------------------
# Registration: wraps *_impl coroutines with FastMCP decorators
# ---------------------------------------------------------------------------


def register_tools(server: Any, session: Any) -> None:
    """Register all MCP tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def discover_tools(category: str | None = None) -> dict[str, Any]:
        """List the available tools, grouped by category."""
        return discover_tools_impl(session, category=category)

    # -- Issues ------------------------------------------------------------

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_issue(
        title: str,
        description: str,
        teamId: str,
        assigneeId: str | None = None,
        priority: float | str | None = None,
        estimate: float | str | None = None,
        projectId: str | None = None,
        createAsUser: str | None = None,
        displayIconUrl: str | None = None,
    ) -> dict[str, Any]:
        """Create a new issue in Linear. Priority is 0-4."""
        issue = _present(
            title=title,
            description=description,
            teamId=teamId,
            assigneeId=assigneeId,
            priority=priority,
            estimate=estimate,
            projectId=projectId,
            createAsUser=createAsUser,
            displayIconUrl=displayIconUrl,
        )
        return await create_issue_impl(session, issue)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_issues(issues: list[dict[str, Any]]) -> dict[str, Any]:
        """Create multiple issues at once. Each needs title, description, teamId."""
        return await create_issues_impl(session, issues)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_project_with_issues(
        project: dict[str, Any], issues: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Create a new project with associated issues.

        The project needs ``name`` and ``teamIds`` (an array, not a single
        ``teamId``).  If the issues fail the project is kept.
        """
        return await create_project_with_issues_impl(session, project, issues)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_bulk_update_issues(
        issueIds: list[str], update: dict[str, Any]
    ) -> dict[str, Any]:
        """Update multiple issues at once (stateId, assigneeId, priority, estimate)."""
        return await bulk_update_issues_impl(session, issueIds, update)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_search_issues(
        query: str | None = None,
        filter: dict[str, Any] | None = None,  # noqa: A002
        teamIds: list[str] | None = None,
        assigneeIds: list[str] | None = None,
        states: list[str] | None = None,
        priority: float | None = None,
        first: int | None = None,
        after: str | None = None,
        orderBy: OrderBy | None = None,
    ) -> dict[str, Any]:
        """Search for issues with filtering and pagination.

        orderBy: createdAt_ASC, createdAt_DESC, updatedAt_ASC, updatedAt_DESC.
        Priority is a filter, never a sort field.
        """
        return await search_issues_impl(
            session,
            query=query,
            filter=filter,
            team_ids=teamIds,
            assignee_ids=assigneeIds,
            states=states,
            priority=priority,
            first=first,
            after=after,
            order_by=orderBy,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_delete_issue(id: str) -> dict[str, Any]:  # noqa: A002
        """Delete an issue."""
        return await delete_issue_impl(session, id)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_delete_issues(ids: list[str]) -> dict[str, Any]:
        """Delete multiple issues in one call."""
        return await delete_issues_impl(session, ids)

    # -- Projects ----------------------------------------------------------

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_get_project(id: str) -> dict[str, Any]:  # noqa: A002
        """Get project information."""
        return await get_project_impl(session, id)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_search_projects(name: str) -> dict[str, Any]:
        """Search for projects by name (exact match)."""
        return await search_projects_impl(session, name)

    # -- Milestones --------------------------------------------------------

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_project_milestone(
        name: str,
        projectId: str,
        description: str | None = None,
        targetDate: str | None = None,
        sortOrder: float | None = None,
    ) -> dict[str, Any]:
        """Create a new project milestone. targetDate is ISO 8601."""
        milestone = _present(
            name=name,
            projectId=projectId,
            description=description,
            targetDate=targetDate,
            sortOrder=sortOrder,
        )
        return await create_project_milestone_impl(session, milestone)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_update_project_milestone(
        id: str,  # noqa: A002
        name: str | None = None,
        description: str | None = None,
        targetDate: str | None = None,
        projectId: str | None = None,
        sortOrder: float | None = None,
    ) -> dict[str, Any]:
        """Update an existing project milestone."""
        update = _present(
            name=name,
            description=description,
            targetDate=targetDate,
            projectId=projectId,
            sortOrder=sortOrder,
        )
        return await update_project_milestone_impl(session, id, update)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_delete_project_milestone(id: str) -> dict[str, Any]:  # noqa: A002
        """Delete a project milestone."""
        return await delete_project_milestone_impl(session, id)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_get_project_milestone(id: str) -> dict[str, Any]:  # noqa: A002
        """Get information about a specific project milestone."""
        return await get_project_milestone_impl(session, id)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_search_project_milestones(
        name: str | None = None,
        projectId: str | None = None,
        targetDate: str | None = None,
        first: int | None = None,
        after: str | None = None,
        orderBy: OrderBy | None = None,
    ) -> dict[str, Any]:
        """Search for project milestones with filtering and pagination."""
        return await search_project_milestones_impl(
            session,
            name=name,
            project_id=projectId,
            target_date=targetDate,
            first=first,
            after=after,
            order_by=orderBy,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_get_project_milestones(
        projectId: str,
        first: int | None = None,
        after: str | None = None,
        orderBy: OrderBy | None = None,
    ) -> dict[str, Any]:
        """Get all milestones for a specific project."""
        return await get_project_milestones_impl(
            session, projectId, first=first, after=after, order_by=orderBy
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_project_milestones(
        projectId: str, milestones: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Create multiple project milestones, one after another."""
        return await create_project_milestones_impl(session, projectId, milestones)

    # -- Comments ----------------------------------------------------------

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_get_issue_comments(
        issueId: str,
        first: int | None = None,
        after: str | None = None,
        includeArchived: bool | None = None,
    ) -> dict[str, Any]:
        """Get comments for a specific issue, with pagination."""
        return await get_issue_comments_impl(
            session, issueId, first=first, after=after, include_archived=includeArchived
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_comment(
        body: str,
        issueId: str,
        parentCommentId: str | None = None,
        createAsUser: str | None = None,
        displayIconUrl: str | None = None,
    ) -> dict[str, Any]:
        """Comment on an issue, or reply to an existing comment."""
        comment = _present(
            body=body,
            issueId=issueId,
            parentCommentId=parentCommentId,
            createAsUser=createAsUser,
            displayIconUrl=displayIconUrl,
        )
        return await create_comment_impl(session, comment)

    # -- Workspace ---------------------------------------------------------

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_get_teams() -> dict[str, Any]:
        """Get all teams with their states and labels."""
        return await get_teams_impl(session)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_get_user() -> dict[str, Any]:
        """Get information about the current user."""
        return await get_user_impl(session)

    @server.tool()  # type: ignore[untyped-decorator]
    async def linear_create_issue_labels(labels: list[dict[str, Any]]) -> dict[str, Any]:
        """Create issue labels. Each needs name and teamId."""
        return await create_issue_labels_impl(session, labels)
