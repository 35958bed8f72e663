"""Search filter assembly.

Each optional search input becomes at most one named predicate.  Predicates
are small frozen models tagged by ``key``; :class:`FilterCriteria` collects
them and refuses to set the same key twice.  Presence is decided per input
(``is not None`` or an explicit type check), never by truthiness alone, so a
``priority`` of ``0`` still filters.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, ClassVar

from pydantic import BaseModel

_IDENTIFIER = re.compile(r"^[A-Za-z]+-(\d+)$")


def extract_issue_number(query: str) -> int | None:
    """Number part of an issue identifier, or None if *query* isn't one.

    Examples:
        >>> extract_issue_number("ENG-42")
        42
        >>> extract_issue_number("login bug") is None
        True
    """
    match = _IDENTIFIER.match(query)
    if match is None:
        return None
    return int(match.group(1))


class Predicate(BaseModel):
    """Base for one filter entry."""

    model_config = {"frozen": True}

    key: ClassVar[str]

    def comparator(self) -> Any:
        raise NotImplementedError


class TextQuery(Predicate):
    """Title substring match OR issue-number match for identifiers like ``ENG-42``.

    When the query is not an identifier the number operand is ``None``; the
    backend treats ``{eq: null}`` as never matching.
    """

    key: ClassVar[str] = "or"
    query: str

    def comparator(self) -> list[dict[str, Any]]:
        return [
            {"title": {"containsIgnoreCase": self.query}},
            {"number": {"eq": extract_issue_number(self.query)}},
        ]


class ProjectIs(Predicate):
    key: ClassVar[str] = "project"
    project_id: str

    def comparator(self) -> dict[str, Any]:
        return {"id": {"eq": self.project_id}}


class TeamIn(Predicate):
    key: ClassVar[str] = "team"
    team_ids: list[str]

    def comparator(self) -> dict[str, Any]:
        return {"id": {"in": list(self.team_ids)}}


class AssigneeIn(Predicate):
    key: ClassVar[str] = "assignee"
    assignee_ids: list[str]

    def comparator(self) -> dict[str, Any]:
        return {"id": {"in": list(self.assignee_ids)}}


class StateNameIn(Predicate):
    key: ClassVar[str] = "state"
    states: list[str]

    def comparator(self) -> dict[str, Any]:
        return {"name": {"in": list(self.states)}}


class PriorityIs(Predicate):
    key: ClassVar[str] = "priority"
    priority: int | float

    def comparator(self) -> dict[str, Any]:
        return {"eq": self.priority}


class NameIs(Predicate):
    key: ClassVar[str] = "name"
    name: str

    def comparator(self) -> dict[str, Any]:
        return {"eq": self.name}


class TargetDateIs(Predicate):
    key: ClassVar[str] = "targetDate"
    target_date: str

    def comparator(self) -> dict[str, Any]:
        return {"eq": self.target_date}


class FilterCriteria:
    """A backend filter built from predicates, one per key."""

    def __init__(self, predicates: Iterable[Predicate] = ()) -> None:
        self._predicates: dict[str, Predicate] = {}
        for predicate in predicates:
            self.add(predicate)

    def add(self, predicate: Predicate) -> None:
        if predicate.key in self._predicates:
            msg = f"Filter predicate {predicate.key!r} is already set"
            raise ValueError(msg)
        self._predicates[predicate.key] = predicate

    def __contains__(self, key: object) -> bool:
        return key in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)

    def __iter__(self) -> Iterator[Predicate]:
        return iter(self._predicates.values())

    def to_dict(self) -> dict[str, Any]:
        return {key: p.comparator() for key, p in self._predicates.items()}


# ---------------------------------------------------------------------------
# Assemblers
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _nested_project_id(filter_arg: Mapping[str, Any] | None) -> Any:
    """Read ``filter.project.id.eq``; any missing or non-mapping hop means absent."""
    node: Any = filter_arg
    for step in ("project", "id", "eq"):
        if not isinstance(node, Mapping):
            return None
        node = node.get(step)
    return node


def issue_predicates(
    *,
    query: str | None = None,
    filter: Mapping[str, Any] | None = None,  # noqa: A002
    team_ids: Sequence[str] | None = None,
    assignee_ids: Sequence[str] | None = None,
    states: Sequence[str] | None = None,
    priority: Any = None,
) -> Iterator[Predicate]:
    """Yield one predicate per supplied issue-search input."""
    if query:
        yield TextQuery(query=query)
    project_id = _nested_project_id(filter)
    if project_id:
        yield ProjectIs(project_id=project_id)
    if team_ids is not None:
        yield TeamIn(team_ids=list(team_ids))
    if assignee_ids is not None:
        yield AssigneeIn(assignee_ids=list(assignee_ids))
    if states is not None:
        yield StateNameIn(states=list(states))
    if _is_number(priority):
        yield PriorityIs(priority=priority)


def build_issue_filter(**inputs: Any) -> FilterCriteria:
    """Assemble issue-search criteria. See :func:`issue_predicates` for inputs."""
    return FilterCriteria(issue_predicates(**inputs))


def build_milestone_filter(
    *,
    name: str | None = None,
    project_id: str | None = None,
    target_date: str | None = None,
) -> FilterCriteria:
    """Assemble project-milestone search criteria."""
    criteria = FilterCriteria()
    if name is not None:
        criteria.add(NameIs(name=name))
    if project_id is not None:
        criteria.add(ProjectIs(project_id=project_id))
    if target_date is not None:
        criteria.add(TargetDateIs(target_date=target_date))
    return criteria


def build_project_filter(*, name: str) -> FilterCriteria:
    """Assemble project search criteria (exact name match)."""
    return FilterCriteria([NameIs(name=name)])
