"""User ORM — one row of the ordered attendance roster.

Invariants:
    - id is an autoincrement integer primary key (store-assigned)
    - order is a positive int, dense 1..N across the table (maintained by services/users.py)
    - checked is non-nullable, defaults to False
    - Caller fields outside FIELDS live in the `attributes` JSON map

Design Decisions:
    - No unique constraint on order: re-sequencing updates rows one at a time
      and would trip it mid-sequence (ADR: dense order is an application invariant)
    - JSON open map over schemaless table: fixed columns stay typed and queryable
"""

from sqlalchemy import Integer, Boolean, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from roster_api.db.base import Base


class User(Base):
    """Roster entry with display order and attendance checkbox."""
    __tablename__ = "users"

    FIELDS = ("id", "name", "order", "checked")

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    checked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    attributes: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
