"""ORM Models — SQLAlchemy declarative models for the two gateway tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model declares FIELDS (fixed columns) and keeps the rest in `attributes`

Design Decisions:
    - One file per table for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete for alembic and tests
"""

from roster_api.models.user import User  # noqa: F401
from roster_api.models.attendance_history import AttendanceHistory  # noqa: F401
