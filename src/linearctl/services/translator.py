"""Result/error translation around every backend call.

* Transport failures become :class:`UpstreamError` with the message
  ``"operation failed: <original message>"``.
* A response whose result field reports ``success: false`` (or, for a
  create, carries no entity) becomes :class:`UpstreamError` with the message
  ``"Failed to <action>"``.
* Successful data payloads pass through unchanged.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import structlog

from linearctl.errors import TransportError, UpstreamError
from linearctl.infrastructure.operations import Operation
from linearctl.infrastructure.transport import Transport
from linearctl.services.telemetry import trace_span

logger = structlog.get_logger(__name__)


async def execute(
    transport: Transport,
    operation: Operation,
    variables: Mapping[str, Any],
) -> dict[str, Any]:
    """Bind *variables* to *operation*, run it, and return the data payload."""
    bound = operation.bind(variables)
    started = time.perf_counter()
    with trace_span(operation.name) as span:
        try:
            data = await transport.execute(operation.name, operation.document, bound)
        except TransportError as exc:
            logger.warning("operation.failed", operation=operation.name, error=exc.message)
            raise UpstreamError(
                f"operation failed: {exc.message}",
                detail={"operation": operation.name},
            ) from exc
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if span is not None:
            span.annotate("variables", sorted(bound))
    logger.debug("operation.complete", operation=operation.name, duration_ms=duration_ms)
    return data


def ensure_success(
    data: Mapping[str, Any],
    operation: Operation,
    action: str,
    *,
    require_entity: bool = False,
) -> None:
    """Raise unless the mutation's result field reports success.

    The field read is the one recorded on *operation*; the response shape is
    never probed to guess which variant ran.  With *require_entity* the
    entity field must also be non-null.
    """
    result = data.get(operation.result_field)
    ok = isinstance(result, Mapping) and result.get("success") is True
    if ok and require_entity and operation.entity_field is not None:
        ok = result.get(operation.entity_field) is not None  # type: ignore[union-attr]
    if not ok:
        logger.warning("operation.unsuccessful", operation=operation.name, action=action)
        raise UpstreamError(f"Failed to {action}", detail={"operation": operation.name})
