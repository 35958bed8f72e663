"""Tests for OperationRouter — one intent, exactly one backend operation."""

from __future__ import annotations

from typing import Any

import pytest

from linearctl.domain.filters import build_issue_filter
from linearctl.domain.types import Cardinality, Entity, Kind, OperationIntent
from linearctl.errors import UpstreamError, ValidationError
from linearctl.services.router import OperationRouter


def _ok(field: str, entity_field: str | None = None, entity: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if entity_field:
        body[entity_field] = entity
    return {field: body}


class TestResolve:
    def test_unregistered_intent(self, transport: Any) -> None:
        router = OperationRouter(transport)
        intent = OperationIntent(entity=Entity.USER, kind=Kind.DELETE)
        with pytest.raises(LookupError, match="delete user"):
            router.resolve(intent)


class TestCreate:
    async def test_create_one_uses_single_operation(self, transport: Any) -> None:
        transport.queue(_ok("issueCreate", "issue", {"id": "i1"}))
        data = await OperationRouter(transport).create_one(Entity.ISSUE, {"title": "T"})
        assert transport.operations == ["CreateIssue"]
        assert transport.variables == [{"input": {"title": "T"}}]
        assert data["issueCreate"]["issue"] == {"id": "i1"}

    async def test_create_many_is_one_batch_call(self, transport: Any) -> None:
        transport.queue(_ok("issueBatchCreate", "issues", [{"id": "a"}, {"id": "b"}, {"id": "c"}]))
        payloads = [{"title": t} for t in "abc"]
        await OperationRouter(transport).create_many(Entity.ISSUE, payloads)
        assert transport.operations == ["CreateBatchIssues"]
        assert transport.variables[0] == {"input": {"issues": payloads}}

    async def test_create_many_with_one_item_still_batches(self, transport: Any) -> None:
        transport.queue(_ok("issueBatchCreate", "issues", [{"id": "a"}]))
        await OperationRouter(transport).create_many(Entity.ISSUE, [{"title": "only"}])
        assert transport.operations == ["CreateBatchIssues"]

    async def test_labels_bind_list_directly(self, transport: Any) -> None:
        transport.queue(_ok("issueLabelCreate", "issueLabels", [{"id": "l1"}]))
        labels = [{"name": "bug", "teamId": "t1"}]
        await OperationRouter(transport).create_many(Entity.LABEL, labels)
        assert transport.variables == [{"labels": labels}]

    async def test_success_false_is_upstream_error(self, transport: Any) -> None:
        transport.queue({"issueCreate": {"success": False, "issue": None}})
        with pytest.raises(UpstreamError, match="^Failed to create issue$"):
            await OperationRouter(transport).create_one(Entity.ISSUE, {"title": "T"})

    async def test_missing_entity_is_upstream_error(self, transport: Any) -> None:
        transport.queue({"issueCreate": {"success": True, "issue": None}})
        with pytest.raises(UpstreamError, match="Failed to create issue"):
            await OperationRouter(transport).create_one(Entity.ISSUE, {"title": "T"})


class TestUpdate:
    async def test_one_id_uses_single_update(self, transport: Any) -> None:
        transport.queue(_ok("issueUpdate", "issue", {"id": "i1"}))
        await OperationRouter(transport).update(Entity.ISSUE, ["i1"], {"priority": 2})
        assert transport.operations == ["UpdateIssue"]
        assert transport.variables == [{"id": "i1", "input": {"priority": 2}}]

    async def test_many_ids_use_batch_update(self, transport: Any) -> None:
        transport.queue(_ok("issueBatchUpdate", "issues", [{"id": "i1"}, {"id": "i2"}]))
        await OperationRouter(transport).update(Entity.ISSUE, ["i1", "i2"], {"priority": 2})
        assert transport.operations == ["UpdateIssues"]
        assert transport.variables == [{"ids": ["i1", "i2"], "input": {"priority": 2}}]

    async def test_batch_reads_batch_result_field(self, transport: Any) -> None:
        # A single-update field in a batch response does not count as success.
        transport.queue(_ok("issueUpdate", "issue", {"id": "i1"}))
        with pytest.raises(UpstreamError, match="Failed to update issues"):
            await OperationRouter(transport).update(Entity.ISSUE, ["i1", "i2"], {})

    async def test_no_ids(self, transport: Any) -> None:
        with pytest.raises(ValidationError):
            await OperationRouter(transport).update(Entity.ISSUE, [], {})
        assert transport.calls == []


class TestDelete:
    async def test_string_id_uses_single_delete(self, transport: Any) -> None:
        transport.queue(_ok("issueDelete"))
        await OperationRouter(transport).delete(Entity.ISSUE, "i1")
        assert transport.operations == ["DeleteIssue"]
        assert transport.variables == [{"id": "i1"}]

    async def test_list_uses_batch_delete_once(self, transport: Any) -> None:
        transport.queue(_ok("issueDelete"))
        await OperationRouter(transport).delete(Entity.ISSUE, ["i1", "i2", "i3"])
        assert transport.operations == ["DeleteIssues"]
        assert transport.variables == [{"ids": ["i1", "i2", "i3"]}]

    async def test_single_element_list_still_batches(self, transport: Any) -> None:
        transport.queue(_ok("issueDelete"))
        await OperationRouter(transport).delete(Entity.ISSUE, ["i1"])
        assert transport.operations == ["DeleteIssues"]


class TestReads:
    async def test_search_forwards_pagination_verbatim(self, transport: Any) -> None:
        transport.queue({"issues": {"nodes": [], "pageInfo": {"hasNextPage": False}}})
        criteria = build_issue_filter(priority=0)
        await OperationRouter(transport).search(
            Entity.ISSUE, criteria, first=10, after="Y3Vyc29yOjQy", order_by="createdAt_ASC"
        )
        assert transport.variables == [
            {
                "filter": {"priority": {"eq": 0}},
                "first": 10,
                "after": "Y3Vyc29yOjQy",
                "orderBy": "createdAt_ASC",
            }
        ]

    async def test_search_returns_data_unchanged(self, transport: Any) -> None:
        payload = {"issues": {"nodes": [{"id": "x"}], "pageInfo": {"endCursor": "c2"}}}
        transport.queue(payload)
        data = await OperationRouter(transport).search(Entity.ISSUE, build_issue_filter())
        assert data == payload

    async def test_get_binds_keyword_variables(self, transport: Any) -> None:
        transport.queue({"project": {"id": "p1"}})
        await OperationRouter(transport).get(Entity.PROJECT, id="p1")
        assert transport.operations == ["GetProject"]
        assert transport.variables == [{"id": "p1"}]

    async def test_get_collection(self, transport: Any) -> None:
        transport.queue({"teams": {"nodes": []}})
        await OperationRouter(transport).get(Entity.TEAM, cardinality=Cardinality.BULK)
        assert transport.operations == ["GetTeams"]
        assert transport.variables == [{}]

    async def test_queries_ignore_success_flags(self, transport: Any) -> None:
        transport.queue({"project": None})
        data = await OperationRouter(transport).get(Entity.PROJECT, id="missing")
        assert data == {"project": None}
