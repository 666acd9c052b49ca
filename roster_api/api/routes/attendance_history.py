"""Attendance History Routes — list, create (duplicate-checked), replace, delete.

Invariants:
    - POST with an existing (date, group, day) → 400, nothing inserted
    - PUT does not re-check the triple
"""

from fastapi import APIRouter, Depends, status

from roster_api.core.identifiers import parse_record_id
from roster_api.infrastructure.record_store import RecordStore, get_store
from roster_api.schemas.records import AttendanceHistoryBody
from roster_api.services import attendance_history as attendance_service

router = APIRouter(prefix="/attendanceHistory", tags=["attendanceHistory"])


@router.get("")
async def list_attendance(store: RecordStore = Depends(get_store)):
    return await attendance_service.list_attendance(store)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_attendance(
    body: AttendanceHistoryBody | None = None,
    store: RecordStore = Depends(get_store),
):
    payload = body.to_payload() if body else {}
    return await attendance_service.create_attendance(store, payload)


@router.put("/{record_id}")
async def replace_attendance(
    record_id: str,
    body: AttendanceHistoryBody | None = None,
    store: RecordStore = Depends(get_store),
):
    payload = body.to_payload() if body else {}
    return await attendance_service.update_attendance(
        store, parse_record_id(record_id), payload,
    )


@router.delete("/{record_id}")
async def delete_attendance(
    record_id: str, store: RecordStore = Depends(get_store),
):
    await attendance_service.delete_attendance(store, parse_record_id(record_id))
    return {"success": True}
