"""Users Routes — roster list, create, replace/toggle and delete.

Invariants:
    - Path ids parsed by parse_record_id (numbers become numbers, else raw)
    - PUT and PATCH share one service call (field-wise update)
    - DELETE replies {"success": true} once the row is gone

Design Decisions:
    - Records returned as plain dicts: bodies are open, no response_model
"""

from fastapi import APIRouter, Depends, status

from roster_api.core.identifiers import parse_record_id
from roster_api.infrastructure.record_store import RecordStore, get_store
from roster_api.schemas.records import UserBody
from roster_api.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(store: RecordStore = Depends(get_store)):
    """All users ordered by `order` ascending."""
    return await users_service.list_users(store)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserBody | None = None, store: RecordStore = Depends(get_store),
):
    """Append a user; `order` and the `checked` default are set server-side."""
    payload = body.to_payload() if body else {}
    return await users_service.create_user(store, payload)


@router.put("/{record_id}")
async def replace_user(
    record_id: str,
    body: UserBody | None = None,
    store: RecordStore = Depends(get_store),
):
    payload = body.to_payload() if body else {}
    return await users_service.update_user(
        store, parse_record_id(record_id), payload,
    )


@router.patch("/{record_id}")
async def patch_user(
    record_id: str,
    body: UserBody | None = None,
    store: RecordStore = Depends(get_store),
):
    """Partial update, typically the `checked` toggle."""
    payload = body.to_payload() if body else {}
    return await users_service.update_user(
        store, parse_record_id(record_id), payload,
    )


@router.delete("/{record_id}")
async def delete_user(record_id: str, store: RecordStore = Depends(get_store)):
    """Delete, then re-sequence the remaining users to 1..N."""
    await users_service.delete_user(store, parse_record_id(record_id))
    return {"success": True}
