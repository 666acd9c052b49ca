"""Request Payload Shaping — pure transforms applied before a body reaches the store.

Invariants:
    - Inputs are never mutated; every function returns a new dict
    - The id of an existing record cannot be changed through a body
    - checked defaults to False when absent or null

Design Decisions:
    - Plain dict transforms over Pydantic validators: bodies are open records
      and these rules depend on the operation, not the shape
"""

from typing import Any

from roster_api.core.domain_types import OrderValue, Record

TRIPLE_FIELDS: tuple[str, str, str] = ("date", "group", "day")


def strip_identifier(body: Record) -> Record:
    """Copy of body without its id field."""
    return {k: v for k, v in body.items() if k != "id"}


def build_new_user(body: Record, order: OrderValue) -> Record:
    """Insert payload for a user: server-assigned order, checked defaulted."""
    checked = body.get("checked")
    return {
        **body,
        "order": order,
        "checked": False if checked is None else checked,
    }


def attendance_triple(body: Record) -> dict[str, Any]:
    """The (date, group, day) filter used by the duplicate check."""
    return {name: body.get(name) for name in TRIPLE_FIELDS}
