"""search — search issues from the command line."""

from __future__ import annotations

import click

from linearctl.commands._base import LinCommand
from linearctl.commands._context import AppContext
from linearctl.domain.types import OrderBy
from linearctl.services.issues import IssueService


@click.command(
    cls=LinCommand,
    examples="""\
  # Title search, or an issue number via its identifier
  linearctl search "login bug"
  linearctl search ENG-42

  # Open urgent issues for two teams
  linearctl search --team TEAM_A --team TEAM_B --state Todo --priority 1

  # Next page, oldest first
  linearctl search --order-by createdAt_ASC --after CURSOR""",
)
@click.argument("query", required=False)
@click.option("--team", "teams", multiple=True, help="Team id (repeatable).")
@click.option("--assignee", "assignees", multiple=True, help="Assignee user id (repeatable).")
@click.option("--state", "states", multiple=True, help="Workflow state name (repeatable).")
@click.option("--priority", type=click.IntRange(0, 4), default=None, help="Exact priority (0-4).")
@click.option("--project", "project_id", default=None, help="Project id.")
@click.option("--first", type=click.IntRange(min=1), default=None, help="Page size.")
@click.option("--after", default=None, help="Cursor from a previous page.")
@click.option(
    "--order-by",
    type=click.Choice([o.value for o in OrderBy]),
    default=None,
    help="Sort order (default: most recently updated first).",
)
@click.pass_obj
def search(
    app: AppContext,
    query: str | None,
    teams: tuple[str, ...],
    assignees: tuple[str, ...],
    states: tuple[str, ...],
    priority: int | None,
    project_id: str | None,
    first: int | None,
    after: str | None,
    order_by: str | None,
) -> None:
    """Search issues by title or identifier, with optional filters."""
    filter_arg = {"project": {"id": {"eq": project_id}}} if project_id else None
    app.emit(
        app.run(
            lambda session: IssueService(session).search_issues(
                query=query,
                filter=filter_arg,
                team_ids=list(teams) or None,
                assignee_ids=list(assignees) or None,
                states=list(states) or None,
                priority=priority,
                first=first or app.settings.search.page_size,
                after=after,
                order_by=order_by or app.settings.search.order_by,
            )
        )
    )
