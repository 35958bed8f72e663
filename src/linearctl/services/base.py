"""BaseService — shared foundation for the per-entity services.

Every service receives a :class:`LinearSession` at construction time and
builds its :class:`OperationRouter` from the session's transport on demand,
so a missing credential surfaces as an ``AUTH_REQUIRED`` result rather than
a constructor error.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from linearctl.domain.normalize import check_list, check_required
from linearctl.errors import LinearctlError, ValidationError
from linearctl.services.result import ServiceResult
from linearctl.services.router import OperationRouter

if TYPE_CHECKING:
    from linearctl.infrastructure.session import LinearSession

logger = structlog.get_logger(__name__)


class BaseService:
    """Base for service classes.

    Usage::

        class IssueService(BaseService):
            @traced
            async def delete_issue(self, issue_id: str) -> ServiceResult:
                op = "delete_issue"
                try:
                    data = await self.router.delete(Entity.ISSUE, issue_id)
                except LinearctlError as exc:
                    return self._fail(op, exc)
                return ServiceResult(ok=True, op=op, data=data)
    """

    def __init__(self, session: LinearSession) -> None:
        self._session = session
        self._router: OperationRouter | None = None

    @property
    def router(self) -> OperationRouter:
        """Router bound to the session transport. May raise ``AuthError``."""
        if self._router is None:
            self._router = OperationRouter(self._session.transport)
        return self._router

    @staticmethod
    def _validate(
        args: Mapping[str, Any],
        *,
        required: Iterable[str] = (),
        lists: Iterable[str] = (),
    ) -> None:
        """Raise :class:`ValidationError` before any backend call is attempted."""
        problems = check_required(args, required)
        for name in lists:
            problems.extend(check_list(args, name))
        if problems:
            raise ValidationError("; ".join(problems))

    @staticmethod
    def _require_mapping(value: Any, name: str) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            msg = f"{name} parameter must be an object"
            raise ValidationError(msg)
        return value

    @staticmethod
    def _fail(op: str, exc: LinearctlError) -> ServiceResult:
        logger.info("service.failed", op=op, code=exc.code, error=exc.message)
        return ServiceResult.failure(op, exc)
