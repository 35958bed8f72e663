"""Static operation table.

Every ``(entity, kind, cardinality)`` the router can serve maps to exactly
one :class:`Operation`.  The table is built at import time; nothing is
resolved lazily.  Result-field names are recorded per operation because
they are not symmetric across intents: single and batch creates and updates
report under different fields (``issueCreate``/``issueBatchCreate``,
``issueUpdate``/``issueBatchUpdate``) while both deletes report under
``issueDelete``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from linearctl.domain.types import Cardinality, Entity, Kind
from linearctl.infrastructure import documents as doc


@dataclass(frozen=True)
class Operation:
    """One named, parameterized backend operation.

    Attributes:
        name: GraphQL operation name (also sent as ``operationName``).
        document: The query or mutation text.
        variables: Variable names the document declares.
        result_field: Top-level response field holding the result.
        entity_field: Field under ``result_field`` holding the created or
            updated entity (singular) or entities (plural).  None for
            queries and deletes.
        input_variable: Variable carrying the create or update payload.
        batch_key: For batch creates, the key the payload list is nested
            under inside the input variable.  None binds the list directly.
    """

    name: str
    document: str
    variables: frozenset[str]
    result_field: str
    entity_field: str | None = None
    input_variable: str = "input"
    batch_key: str | None = None

    @property
    def is_mutation(self) -> bool:
        return self.document.lstrip().startswith("mutation")

    def bind(self, variables: Mapping[str, Any]) -> dict[str, Any]:
        """Return *variables* as a dict after checking every name is declared.

        Raises:
            ValueError: if a variable is not declared by this operation.
        """
        undeclared = sorted(set(variables) - self.variables)
        if undeclared:
            msg = f"{self.name} does not declare variables: {', '.join(undeclared)}"
            raise ValueError(msg)
        return dict(variables)


def _op(
    name: str,
    document: str,
    variables: tuple[str, ...],
    result_field: str,
    *,
    entity_field: str | None = None,
    input_variable: str = "input",
    batch_key: str | None = None,
) -> Operation:
    return Operation(
        name=name,
        document=document,
        variables=frozenset(variables),
        result_field=result_field,
        entity_field=entity_field,
        input_variable=input_variable,
        batch_key=batch_key,
    )


_PAGED = ("filter", "first", "after", "orderBy")

OperationKey = tuple[Entity, Kind, Cardinality]

OPERATIONS: Mapping[OperationKey, Operation] = {
    # Issues
    (Entity.ISSUE, Kind.CREATE, Cardinality.SINGLE): _op(
        "CreateIssue", doc.CREATE_ISSUE, ("input",), "issueCreate", entity_field="issue"
    ),
    (Entity.ISSUE, Kind.CREATE, Cardinality.BULK): _op(
        "CreateBatchIssues",
        doc.CREATE_BATCH_ISSUES,
        ("input",),
        "issueBatchCreate",
        entity_field="issues",
        batch_key="issues",
    ),
    (Entity.ISSUE, Kind.UPDATE, Cardinality.SINGLE): _op(
        "UpdateIssue", doc.UPDATE_ISSUE, ("id", "input"), "issueUpdate", entity_field="issue"
    ),
    (Entity.ISSUE, Kind.UPDATE, Cardinality.BULK): _op(
        "UpdateIssues",
        doc.UPDATE_ISSUES,
        ("ids", "input"),
        "issueBatchUpdate",
        entity_field="issues",
    ),
    (Entity.ISSUE, Kind.DELETE, Cardinality.SINGLE): _op(
        "DeleteIssue", doc.DELETE_ISSUE, ("id",), "issueDelete"
    ),
    (Entity.ISSUE, Kind.DELETE, Cardinality.BULK): _op(
        "DeleteIssues", doc.DELETE_ISSUES, ("ids",), "issueDelete"
    ),
    (Entity.ISSUE, Kind.SEARCH, Cardinality.SINGLE): _op(
        "SearchIssues", doc.SEARCH_ISSUES, _PAGED, "issues"
    ),
    # Projects
    (Entity.PROJECT, Kind.CREATE, Cardinality.SINGLE): _op(
        "CreateProject", doc.CREATE_PROJECT, ("input",), "projectCreate", entity_field="project"
    ),
    (Entity.PROJECT, Kind.GET, Cardinality.SINGLE): _op(
        "GetProject", doc.GET_PROJECT, ("id",), "project"
    ),
    (Entity.PROJECT, Kind.SEARCH, Cardinality.SINGLE): _op(
        "SearchProjects", doc.SEARCH_PROJECTS, ("filter",), "projects"
    ),
    # Project milestones
    (Entity.MILESTONE, Kind.CREATE, Cardinality.SINGLE): _op(
        "CreateProjectMilestone",
        doc.CREATE_PROJECT_MILESTONE,
        ("input",),
        "projectMilestoneCreate",
        entity_field="projectMilestone",
    ),
    (Entity.MILESTONE, Kind.UPDATE, Cardinality.SINGLE): _op(
        "UpdateProjectMilestone",
        doc.UPDATE_PROJECT_MILESTONE,
        ("id", "input"),
        "projectMilestoneUpdate",
        entity_field="projectMilestone",
    ),
    (Entity.MILESTONE, Kind.DELETE, Cardinality.SINGLE): _op(
        "DeleteProjectMilestone", doc.DELETE_PROJECT_MILESTONE, ("id",), "projectMilestoneDelete"
    ),
    (Entity.MILESTONE, Kind.GET, Cardinality.SINGLE): _op(
        "GetProjectMilestone", doc.GET_PROJECT_MILESTONE, ("id",), "projectMilestone"
    ),
    (Entity.MILESTONE, Kind.SEARCH, Cardinality.SINGLE): _op(
        "SearchProjectMilestones", doc.SEARCH_PROJECT_MILESTONES, _PAGED, "projectMilestones"
    ),
    # Comments
    (Entity.COMMENT, Kind.CREATE, Cardinality.SINGLE): _op(
        "CreateComment", doc.CREATE_COMMENT, ("input",), "commentCreate", entity_field="comment"
    ),
    (Entity.COMMENT, Kind.SEARCH, Cardinality.SINGLE): _op(
        "GetIssueComments",
        doc.GET_ISSUE_COMMENTS,
        ("issueId", "first", "after", "includeArchived"),
        "issue",
    ),
    # Teams, labels, users
    (Entity.TEAM, Kind.GET, Cardinality.BULK): _op("GetTeams", doc.GET_TEAMS, (), "teams"),
    (Entity.LABEL, Kind.CREATE, Cardinality.BULK): _op(
        "CreateIssueLabels",
        doc.CREATE_ISSUE_LABELS,
        ("labels",),
        "issueLabelCreate",
        entity_field="issueLabels",
        input_variable="labels",
    ),
    (Entity.USER, Kind.GET, Cardinality.SINGLE): _op("GetUser", doc.GET_USER, (), "viewer"),
}
