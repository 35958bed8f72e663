"""Shared pytest fixtures for linearctl tests."""

from __future__ import annotations

import functools
import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from linearctl.config.settings import LinearSettings
from linearctl.infrastructure.session import LinearSession
from linearctl.infrastructure.transport import build_async_client


class RecordingTransport:
    """Fake transport: records every call and replays queued responses.

    Each queued item is either a ``data`` dict to return or an exception to
    raise.  Running out of responses fails the test loudly.
    """

    def __init__(self, *responses: dict[str, Any] | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def queue(self, *responses: dict[str, Any] | Exception) -> None:
        self.responses.extend(responses)

    async def execute(
        self,
        operation: str,
        document: str,
        variables: Mapping[str, Any],
    ) -> dict[str, Any]:
        self.calls.append((operation, document, dict(variables)))
        if not self.responses:
            raise AssertionError(f"unexpected backend call: {operation}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def operations(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    @property
    def variables(self) -> list[dict[str, Any]]:
        return [variables for _, _, variables in self.calls]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's own key and config out of every test."""
    for name in ("LINEARCTL_API_KEY", "LINEARCTL_CONFIG", "LINEARCTL_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> LinearSettings:
    """Settings with an API key and no config file."""
    return LinearSettings(api_key="lin_api_test")


@pytest.fixture
def transport() -> RecordingTransport:
    """Empty recording transport; tests queue responses onto it."""
    return RecordingTransport()


@pytest.fixture
def session(settings: LinearSettings, transport: RecordingTransport) -> LinearSession:
    """Session wired to the recording transport."""
    return LinearSession(settings, transport=transport)


@pytest.fixture
def unauthenticated_session() -> LinearSession:
    """Session with no credential and no injected transport."""
    return LinearSession(LinearSettings())


class HttpBackend:
    """``httpx.MockTransport`` handler that replays queued JSON bodies."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, data: dict[str, Any], *, status_code: int = 200) -> None:
        self.responses.append(httpx.Response(status_code, json={"data": data}))

    def reply_raw(self, response: httpx.Response) -> None:
        self.responses.append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request to {request.url}")
        return self.responses.pop(0)

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def http_backend(monkeypatch: pytest.MonkeyPatch) -> HttpBackend:
    """Every session opened during the test talks to an in-memory backend."""
    backend = HttpBackend()
    mock = httpx.MockTransport(backend.handler)
    monkeypatch.setattr(
        "linearctl.infrastructure.session.build_async_client",
        functools.partial(build_async_client, transport=mock),
    )
    return backend


# ---------------------------------------------------------------------------
# Canned backend payloads
# ---------------------------------------------------------------------------


def issue_node(number: int = 1, **fields: Any) -> dict[str, Any]:
    node = {
        "id": f"issue-{number}",
        "identifier": f"ENG-{number}",
        "title": f"Issue {number}",
        "priority": 0,
        "state": {"id": "state-1", "name": "Todo"},
        "assignee": None,
    }
    node.update(fields)
    return node


@pytest.fixture
def make_issue() -> Callable[..., dict[str, Any]]:
    return issue_node
