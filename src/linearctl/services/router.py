"""OperationRouter — maps an intent onto exactly one backend operation.

Routing rules:

* **create** — :meth:`create_one` always uses the single-entity operation;
  :meth:`create_many` always uses the batch operation, once, whatever the
  number of payloads.  The entry point decides which result shape to expect.
* **update** — one id goes to the single update (``id``), two or more to the
  batch update (``ids``), each with its own result field.
* **delete** — a single id string goes to the single delete; a list goes to
  the batch delete, even when it holds one id.
* **search** / **get** — always one operation; search forwards ``first``,
  ``after`` and ``orderBy`` verbatim.

The router never retries and never inspects cursors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from linearctl.domain.filters import FilterCriteria
from linearctl.domain.types import Cardinality, Entity, Kind, OperationIntent
from linearctl.errors import ValidationError
from linearctl.infrastructure.operations import OPERATIONS, Operation, OperationKey
from linearctl.infrastructure.transport import Transport
from linearctl.services.translator import ensure_success, execute

DEFAULT_PAGE_SIZE = 50
DEFAULT_ORDER_BY = "updatedAt"


class OperationRouter:
    """Resolve intents against the operation table and run them."""

    def __init__(
        self,
        transport: Transport,
        *,
        operations: Mapping[OperationKey, Operation] = OPERATIONS,
    ) -> None:
        self._transport = transport
        self._operations = operations

    def resolve(self, intent: OperationIntent) -> Operation:
        """Return the operation registered for *intent*.

        Raises:
            LookupError: if the table has no entry for it.
        """
        try:
            return self._operations[intent.key]
        except KeyError:
            msg = f"No operation registered for {intent.action!r}"
            raise LookupError(msg) from None

    async def _mutate(
        self,
        intent: OperationIntent,
        variables: Mapping[str, Any],
        *,
        require_entity: bool = False,
    ) -> dict[str, Any]:
        operation = self.resolve(intent)
        data = await execute(self._transport, operation, variables)
        ensure_success(data, operation, intent.action, require_entity=require_entity)
        return data

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_one(self, entity: Entity, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Create one entity; the response carries the singular entity field."""
        intent = OperationIntent(entity=entity, kind=Kind.CREATE)
        operation = self.resolve(intent)
        return await self._mutate(
            intent, {operation.input_variable: dict(payload)}, require_entity=True
        )

    async def create_many(
        self, entity: Entity, payloads: Sequence[Mapping[str, Any]]
    ) -> dict[str, Any]:
        """Create every payload in one batch call; the response carries a list."""
        intent = OperationIntent(entity=entity, kind=Kind.CREATE, cardinality=Cardinality.BULK)
        operation = self.resolve(intent)
        items = [dict(p) for p in payloads]
        value: Any = {operation.batch_key: items} if operation.batch_key else items
        return await self._mutate(intent, {operation.input_variable: value}, require_entity=True)

    # ------------------------------------------------------------------
    # Update / delete
    # ------------------------------------------------------------------

    async def update(
        self,
        entity: Entity,
        ids: Sequence[str],
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Apply one shared *payload* to every id in *ids*."""
        if not ids:
            msg = f"At least one {entity.label} id is required"
            raise ValidationError(msg)
        if len(ids) == 1:
            intent = OperationIntent(entity=entity, kind=Kind.UPDATE)
            variables: dict[str, Any] = {"id": ids[0], "input": dict(payload)}
        else:
            intent = OperationIntent(entity=entity, kind=Kind.UPDATE, cardinality=Cardinality.BULK)
            variables = {"ids": list(ids), "input": dict(payload)}
        return await self._mutate(intent, variables)

    async def delete(self, entity: Entity, ids: str | Sequence[str]) -> dict[str, Any]:
        """Delete one id (``str``) or a list of ids (one batch call)."""
        if isinstance(ids, str):
            intent = OperationIntent(entity=entity, kind=Kind.DELETE)
            variables: dict[str, Any] = {"id": ids}
        else:
            intent = OperationIntent(entity=entity, kind=Kind.DELETE, cardinality=Cardinality.BULK)
            variables = {"ids": list(ids)}
        return await self._mutate(intent, variables)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def search(
        self,
        entity: Entity,
        criteria: FilterCriteria,
        *,
        first: int = DEFAULT_PAGE_SIZE,
        after: str | None = None,
        order_by: str = DEFAULT_ORDER_BY,
    ) -> dict[str, Any]:
        """Run the paginated search for *entity*; the cursor passes through untouched."""
        intent = OperationIntent(entity=entity, kind=Kind.SEARCH)
        variables = {
            "filter": criteria.to_dict(),
            "first": first,
            "after": after,
            "orderBy": order_by,
        }
        return await execute(self._transport, self.resolve(intent), variables)

    async def find(self, entity: Entity, criteria: FilterCriteria) -> dict[str, Any]:
        """Run an unpaginated filtered search (projects by name)."""
        intent = OperationIntent(entity=entity, kind=Kind.SEARCH)
        return await execute(self._transport, self.resolve(intent), {"filter": criteria.to_dict()})

    async def get(
        self,
        entity: Entity,
        *,
        cardinality: Cardinality = Cardinality.SINGLE,
        **variables: Any,
    ) -> dict[str, Any]:
        """Fetch by id, or fetch a collection that takes no arguments."""
        intent = OperationIntent(entity=entity, kind=Kind.GET, cardinality=cardinality)
        return await execute(self._transport, self.resolve(intent), variables)

    async def list_children(
        self, entity: Entity, variables: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Run a search keyed on a parent rather than a filter (issue comments)."""
        intent = OperationIntent(entity=entity, kind=Kind.SEARCH)
        return await execute(self._transport, self.resolve(intent), variables)
