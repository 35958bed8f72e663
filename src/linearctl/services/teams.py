"""TeamService — workspace teams and their issue labels."""

from __future__ import annotations

from typing import Any

from linearctl.domain.types import Cardinality, Entity
from linearctl.errors import LinearctlError
from linearctl.services.base import BaseService
from linearctl.services.result import ServiceResult
from linearctl.services.telemetry import traced

LABEL_REQUIRED = ("name", "teamId")


class TeamService(BaseService):
    @traced
    async def get_teams(self) -> ServiceResult:
        """Every team with its workflow states and labels."""
        op = "get_teams"
        try:
            data = await self.router.get(Entity.TEAM, cardinality=Cardinality.BULK)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    async def create_issue_labels(self, labels: Any) -> ServiceResult:
        """Create all *labels* in one call."""
        op = "create_issue_labels"
        try:
            self._validate({"labels": labels}, required=("labels",), lists=("labels",))
            for index, label in enumerate(labels):
                self._validate(
                    self._require_mapping(label, f"labels[{index}]"), required=LABEL_REQUIRED
                )
            data = await self.router.create_many(Entity.LABEL, labels)
        except LinearctlError as exc:
            return self._fail(op, exc)
        return ServiceResult(ok=True, op=op, data=data, meta={"count": len(labels)})
