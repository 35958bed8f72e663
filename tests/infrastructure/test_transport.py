"""Tests for the httpx GraphQL transport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from linearctl.config.models import ApiConfig
from linearctl.errors import TransportError
from linearctl.infrastructure.transport import HttpTransport, build_async_client

URL = "https://api.linear.app/graphql"


def _transport(handler: Any, *, token: str = "lin_api_test") -> HttpTransport:
    client = build_async_client(ApiConfig(), token=token, transport=httpx.MockTransport(handler))
    return HttpTransport(client, url=URL)


class TestHttpTransport:
    async def test_posts_named_operation(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"viewer": {"id": "u1"}}})

        transport = _transport(handler)
        data = await transport.execute("GetUser", "query GetUser { viewer { id } }", {})
        await transport.aclose()

        assert data == {"viewer": {"id": "u1"}}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == URL
        assert request.headers["Authorization"] == "lin_api_test"
        assert request.headers["User-Agent"] == "linearctl"
        body = json.loads(request.content)
        assert body == {
            "query": "query GetUser { viewer { id } }",
            "variables": {},
            "operationName": "GetUser",
        }

    async def test_variables_sent_verbatim(self) -> None:
        seen: list[dict[str, Any]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"data": {"issues": {"nodes": []}}})

        transport = _transport(handler)
        variables = {"filter": {}, "first": 50, "after": "opaque==cursor", "orderBy": "updatedAt"}
        await transport.execute("SearchIssues", "query SearchIssues { issues }", variables)
        assert seen[0]["variables"] == variables

    async def test_graphql_errors_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"errors": [{"message": "Entity not found"}, {"message": "Bad id"}]},
            )

        with pytest.raises(TransportError, match="Entity not found; Bad id"):
            await _transport(handler).execute("GetProject", "query GetProject { p }", {"id": "x"})

    async def test_http_error_without_graphql_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"message": "down"})

        with pytest.raises(TransportError, match="HTTP 503"):
            await _transport(handler).execute("GetTeams", "query GetTeams { teams }", {})

    async def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>bad gateway</html>")

        with pytest.raises(TransportError, match="not JSON"):
            await _transport(handler).execute("GetTeams", "query GetTeams { teams }", {})

    async def test_missing_data(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": None})

        with pytest.raises(TransportError, match="carried no data"):
            await _transport(handler).execute("GetTeams", "query GetTeams { teams }", {})

    async def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused"):
            await _transport(handler).execute("GetTeams", "query GetTeams { teams }", {})


class TestBuildAsyncClient:
    def test_timeout_from_config(self) -> None:
        client = build_async_client(ApiConfig(timeout_seconds=5.0), token="k")
        assert client.timeout.read == 5.0
        assert client.headers["Content-Type"] == "application/json"
