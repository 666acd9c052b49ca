"""Boundary Protocols — contract between the services and the record store.

Invariants:
    - Services depend on StoreClient, never on AsyncSession or ORM models
    - Every method raises StoreError (core/errors.py) on failure
    - The surface is the full table client (select/insert/update/delete plus
      the _one variants), not only the calls the current services make

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in Protocol: every implementation does IO
"""

from typing import Any, Protocol

from roster_api.core.domain_types import Record


class StoreClient(Protocol):
    """Table-level CRUD over flat records — implemented by infrastructure/record_store.py."""
    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | tuple[str, ...] | None = None,
        ascending: bool = True,
        limit: int | None = None,
        columns: tuple[str, ...] | None = None,
    ) -> list[Record]: ...
    async def insert(self, table: str, record: Record) -> Record: ...
    async def update(
        self, table: str, values: Record, filters: dict[str, Any],
    ) -> list[Record]: ...
    async def update_one(
        self, table: str, values: Record, filters: dict[str, Any],
    ) -> Record: ...
    async def delete(self, table: str, filters: dict[str, Any]) -> int: ...
    async def delete_one(self, table: str, filters: dict[str, Any]) -> None: ...
