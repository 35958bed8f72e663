"""ServiceResult and ServiceError — the contract every service call returns.

INVARIANT: public service coroutines return a ServiceResult; classified
failures never escape as exceptions.  The CLI and the MCP tools both
consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from linearctl.errors import LinearctlError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one caller invocation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_issue"``).
        data: The backend's data payload, passed through unchanged.
        warnings: Non-fatal issues (e.g. repaired arguments).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: LinearctlError) -> ServiceResult:
        """Build a failed result from a classified exception."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )
