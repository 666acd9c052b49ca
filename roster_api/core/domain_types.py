"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId is whatever the path segment parsed to: number or raw string
    - Table names are the store's names verbatim ("attendanceHistory" is camelCase)
    - All valid tables encoded as an Enum, no raw string matching

Design Decisions:
    - str Enum for tables: usable directly as store keys and log extras
"""

from enum import Enum
from typing import Any, NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

RecordId = Union[int, float, str]
OrderValue = NewType("OrderValue", int)  # 1-based, dense


# ─── Value Types ─────────────────────────────────────────────────

Record = dict[str, Any]  # flat JSON object as seen by clients


# ─── Enums ───────────────────────────────────────────────────────

class Table(str, Enum):
    """Tables exposed through the gateway."""
    USERS = "users"
    ATTENDANCE_HISTORY = "attendanceHistory"
