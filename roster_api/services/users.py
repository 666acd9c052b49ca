"""Users Service — roster CRUD with the dense 1..N order invariant.

Invariants:
    - create: order = max(order) + 1 (1 on empty table); checked defaults to False
    - update: id in the body is ignored; only supplied fields change
    - delete: after the row is gone, survivors are re-sequenced to 1..N
      preserving their relative order; ties on order keep id order

Design Decisions:
    - Two round trips for max-order + insert, no transaction: concurrent creates
      may share an order value (ADR: per-statement guarantees only)
    - Re-sequencing is best-effort: a failed correction is logged and skipped,
      the delete still reports success (ADR: delete already committed)
"""

import logging

from roster_api.core.domain_types import Record, RecordId, Table
from roster_api.core.errors import StoreError
from roster_api.core.ordering import next_order, plan_resequence
from roster_api.core.payloads import build_new_user, strip_identifier
from roster_api.core.repository_protocols import StoreClient

logger = logging.getLogger(__name__)

TABLE = Table.USERS.value


async def list_users(store: StoreClient) -> list[Record]:
    return await store.select(TABLE, order_by=("order", "id"), ascending=True)


async def create_user(store: StoreClient, body: Record) -> Record:
    """Insert a user at the end of the roster."""
    top = await store.select(
        TABLE, order_by="order", ascending=False, limit=1, columns=("order",),
    )
    payload = build_new_user(body, next_order(top))
    return await store.insert(TABLE, payload)


async def update_user(
    store: StoreClient, record_id: RecordId, body: Record,
) -> Record:
    """Field-wise update; serves both PUT and PATCH."""
    return await store.update_one(
        TABLE, strip_identifier(body), {"id": record_id},
    )


async def delete_user(store: StoreClient, record_id: RecordId) -> None:
    await store.delete_one(TABLE, {"id": record_id})
    await resequence_users(store)


async def resequence_users(store: StoreClient) -> int:
    """Restore order == position + 1 on every row. Returns corrections that failed."""
    rows = await store.select(TABLE, order_by=("order", "id"), ascending=True)
    corrections = plan_resequence(rows)
    failed = 0
    for row_id, order in corrections:
        try:
            await store.update_one(TABLE, {"order": order}, {"id": row_id})
        except Exception as e:
            failed += 1
            detail = e.detail if isinstance(e, StoreError) else str(e)
            logger.warning(
                f"Re-sequencing user {row_id} to order {order} failed: {detail}",
                extra={"table": TABLE, "record_id": row_id},
                exc_info=True,
            )
    if corrections:
        logger.info(
            f"Re-sequenced {len(corrections) - failed}/{len(corrections)} users",
            extra={"table": TABLE, "corrections": len(corrections)},
        )
    return failed
