"""Entity, intent, and cardinality enums shared by every layer.

An :class:`OperationIntent` names one logical caller request.  The router
resolves it against the static operation table; nothing about an intent is
retained once the call returns.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Entity(StrEnum):
    """Backend entity types reachable through the operation catalog."""

    ISSUE = "issue"
    PROJECT = "project"
    MILESTONE = "milestone"
    COMMENT = "comment"
    LABEL = "label"
    TEAM = "team"
    USER = "user"

    @property
    def label(self) -> str:
        """Caller-facing singular noun (``"project milestone"``)."""
        return _LABELS[self][0]

    @property
    def plural(self) -> str:
        """Caller-facing plural noun (``"project milestones"``)."""
        return _LABELS[self][1]


_LABELS: dict[Entity, tuple[str, str]] = {
    Entity.ISSUE: ("issue", "issues"),
    Entity.PROJECT: ("project", "projects"),
    Entity.MILESTONE: ("project milestone", "project milestones"),
    Entity.COMMENT: ("comment", "comments"),
    Entity.LABEL: ("issue label", "issue labels"),
    Entity.TEAM: ("team", "teams"),
    Entity.USER: ("user", "users"),
}


class Kind(StrEnum):
    """What the caller wants done."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SEARCH = "search"
    GET = "get"


class Cardinality(StrEnum):
    """Whether an intent maps to a single-entity or a batch backend operation.

    Search and get intents always resolve to one backend operation and use
    ``SINGLE``; their result size is governed by pagination instead.
    """

    SINGLE = "single"
    BULK = "bulk"


class OrderBy(StrEnum):
    """Order-by values accepted from callers. Priority is deliberately absent."""

    CREATED_ASC = "createdAt_ASC"
    CREATED_DESC = "createdAt_DESC"
    UPDATED_ASC = "updatedAt_ASC"
    UPDATED_DESC = "updatedAt_DESC"


class OperationIntent(BaseModel):
    """One logical request: what to do, to how many, of which entity."""

    model_config = {"frozen": True}

    entity: Entity
    kind: Kind
    cardinality: Cardinality = Cardinality.SINGLE

    @property
    def key(self) -> tuple[Entity, Kind, Cardinality]:
        return (self.entity, self.kind, self.cardinality)

    @property
    def action(self) -> str:
        """Caller-facing verb phrase, e.g. ``"update issues"``."""
        noun = self.entity.plural if self.cardinality is Cardinality.BULK else self.entity.label
        return f"{self.kind.value} {noun}"
