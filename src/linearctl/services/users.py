"""UserService — the authenticated user."""

from __future__ import annotations

from linearctl.domain.types import Entity
from linearctl.errors import LinearctlError
from linearctl.services.base import BaseService
from linearctl.services.result import ServiceResult
from linearctl.services.telemetry import traced


class UserService(BaseService):
    @traced
    async def get_current_user(self) -> ServiceResult:
        """The user the API key belongs to, with their teams."""
        op = "get_current_user"
        try:
            data = await self.router.get(Entity.USER)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)
