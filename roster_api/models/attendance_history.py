"""AttendanceHistory ORM — one attendance session of one group on one day.

Invariants:
    - id is an autoincrement integer primary key (store-assigned)
    - (date, group, day) is a soft uniqueness key, checked before insert
    - Attendance detail (present students, notes, ...) lives in `attributes`

Design Decisions:
    - No UniqueConstraint on the triple: duplicates are rejected in
      services/attendance_history.py with a 400, not by the store (ADR: client-facing message)
    - Triple columns are text: clients send dates and weekday names as strings
"""

from sqlalchemy import Integer, String, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from roster_api.db.base import Base


class AttendanceHistory(Base):
    """Attendance record keyed softly by (date, group, day)."""
    __tablename__ = "attendanceHistory"

    FIELDS = ("id", "date", "group", "day")

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    date: Mapped[str] = mapped_column(String(32), nullable=False)
    group: Mapped[str] = mapped_column(String(100), nullable=False)
    day: Mapped[str] = mapped_column(String(32), nullable=False)
    attributes: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )

    __table_args__ = (
        Index("ix_attendance_history_triple", "date", "group", "day"),
    )
