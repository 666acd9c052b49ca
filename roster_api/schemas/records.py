"""Record Schemas — open Pydantic bodies for users and attendance history.

Invariants:
    - Known fields are typed; every other field is accepted as-is (extra="allow")
    - to_payload() returns only the fields the caller actually sent
    - Numbers sent for text fields (group "7", day 3) are coerced to strings

Design Decisions:
    - All known fields optional: missing required columns are rejected by the
      store (500), malformed types are rejected here with the same 500 shape
    - id accepted in bodies so it can be stripped by the service, not rejected
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class OpenRecord(BaseModel):
    """Base for passthrough bodies: typed known fields plus an open map."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: int | str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Fields explicitly sent by the caller, extras included."""
        return self.model_dump(exclude_unset=True)


class UserBody(OpenRecord):
    """User create/update body — order is server-managed on create."""
    name: str | None = None
    order: int | None = None
    checked: bool | None = None


class AttendanceHistoryBody(OpenRecord):
    """Attendance record body — (date, group, day) is the soft uniqueness key."""
    date: str | None = None
    group: str | None = None
    day: str | None = None
