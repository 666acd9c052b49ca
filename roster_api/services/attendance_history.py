"""Attendance History Service — CRUD with the (date, group, day) duplicate check.

Invariants:
    - create: an existing row with the same triple rejects the request
      before any insert; the body is otherwise stored verbatim
    - update: id in the body is ignored; the triple is NOT re-validated
    - delete: no re-sequencing (the table has no ordering invariant)
"""

import logging

from roster_api.core.domain_types import Record, RecordId, Table
from roster_api.core.errors import DuplicateAttendanceError, ErrorContext
from roster_api.core.payloads import attendance_triple, strip_identifier
from roster_api.core.repository_protocols import StoreClient

logger = logging.getLogger(__name__)

TABLE = Table.ATTENDANCE_HISTORY.value


async def list_attendance(store: StoreClient) -> list[Record]:
    return await store.select(TABLE, order_by="id", ascending=True)


async def create_attendance(store: StoreClient, body: Record) -> Record:
    triple = attendance_triple(body)
    existing = await store.select(TABLE, filters=triple, columns=("id",))
    if existing:
        raise DuplicateAttendanceError(
            triple["date"], triple["group"], triple["day"],
            ErrorContext(table=TABLE, record_id=existing[0]["id"]),
        )
    created = await store.insert(TABLE, body)
    logger.info(
        f"Attendance recorded for group {triple['group']} on {triple['date']}",
        extra={"table": TABLE, "record_id": created["id"]},
    )
    return created


async def update_attendance(
    store: StoreClient, record_id: RecordId, body: Record,
) -> Record:
    return await store.update_one(
        TABLE, strip_identifier(body), {"id": record_id},
    )


async def delete_attendance(store: StoreClient, record_id: RecordId) -> None:
    await store.delete_one(TABLE, {"id": record_id})
