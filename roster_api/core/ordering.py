"""Dense Ordering — pure arithmetic behind the users.order invariant.

Invariants:
    - next_order(max_rows) == max(order) + 1, or 1 for an empty table
    - plan_resequence yields only the rows whose order differs from index + 1
    - Relative order of surviving rows is preserved (input is already sorted)

Design Decisions:
    - Pure planning separated from the store calls that apply it: the service
      issues one update per correction, sequentially (ADR: impureim sandwich)
"""

from typing import Iterable

from roster_api.core.domain_types import OrderValue, Record, RecordId


def next_order(max_rows: list[Record]) -> OrderValue:
    """Order for a new row, given the top row of a descending order query."""
    last = (max_rows[0].get("order") if max_rows else None) or 0
    return OrderValue(int(last) + 1)


def plan_resequence(
    rows_by_order: Iterable[Record],
) -> list[tuple[RecordId, OrderValue]]:
    """(id, new order) pairs that restore 1..N over rows sorted by order."""
    return [
        (row["id"], OrderValue(position))
        for position, row in enumerate(rows_by_order, start=1)
        if row.get("order") != position
    ]


def is_dense(orders: Iterable[int]) -> bool:
    """True when the values are exactly {1, ..., N}."""
    values = sorted(orders)
    return values == list(range(1, len(values) + 1))
