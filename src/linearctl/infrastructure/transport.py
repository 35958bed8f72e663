"""GraphQL transport over ``httpx.AsyncClient``.

A transport executes one named operation with bound variables and returns
the response's ``data`` object, or raises :class:`TransportError`.  It never
retries and never interprets ``success`` flags; that is the translator's job.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from linearctl.config.models import ApiConfig
from linearctl.errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can execute a GraphQL document."""

    async def execute(
        self,
        operation: str,
        document: str,
        variables: Mapping[str, Any],
    ) -> dict[str, Any]: ...


def build_async_client(
    api: ApiConfig,
    *,
    token: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the ``httpx.AsyncClient`` used for every backend call.

    *transport* replaces the network layer (``httpx.MockTransport`` in tests).
    """
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(api.timeout_seconds),
        headers={
            "Authorization": token,
            "Content-Type": "application/json",
            "User-Agent": api.user_agent,
        },
    )


def _error_messages(errors: Any) -> str:
    if not isinstance(errors, list):
        return str(errors)
    parts = [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
    return "; ".join(parts)


class HttpTransport:
    """POST GraphQL documents to a single endpoint."""

    def __init__(self, client: httpx.AsyncClient, *, url: str) -> None:
        self._client = client
        self._url = url

    async def execute(
        self,
        operation: str,
        document: str,
        variables: Mapping[str, Any],
    ) -> dict[str, Any]:
        body = {"query": document, "variables": dict(variables), "operationName": operation}
        try:
            response = await self._client.post(self._url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"HTTP {response.status_code}: response is not JSON"
            raise TransportError(msg) from exc

        # GraphQL errors often arrive with a 4xx status; prefer their text.
        if isinstance(payload, dict) and payload.get("errors"):
            raise TransportError(_error_messages(payload["errors"]))
        if response.is_error:
            msg = f"HTTP {response.status_code}: {response.reason_phrase}"
            raise TransportError(msg)

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            msg = f"{operation} response carried no data"
            raise TransportError(msg)
        logger.debug("graphql %s -> HTTP %s", operation, response.status_code)
        return data

    async def aclose(self) -> None:
        await self._client.aclose()
