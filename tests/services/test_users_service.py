"""Users Service — order assignment and re-sequencing against a real store.

Tests cover:
    - create assigns max + 1 (1 on empty), regardless of gaps
    - delete leaves orders dense 1..N over random create/delete sequences
    - relative order of survivors is preserved
    - a failing correction is skipped, logged, and the rest still apply
    - rows sharing an order value are renumbered in id order
"""

import logging
import random

import pytest

from roster_api.core.errors import StoreError
from roster_api.core.ordering import is_dense
from roster_api.infrastructure.record_store import RecordStore
from roster_api.services import users as users_service


async def test_create_into_empty_table_gets_order_one(store):
    user = await users_service.create_user(store, {"name": "Ali"})
    assert user["order"] == 1
    assert user["checked"] is False


async def test_create_uses_current_maximum(store):
    await store.insert("users", {"name": "a", "order": 1})
    await store.insert("users", {"name": "b", "order": 9})
    user = await users_service.create_user(store, {"name": "c"})
    assert user["order"] == 10


async def test_create_ignores_client_order(store):
    user = await users_service.create_user(store, {"name": "a", "order": 50})
    assert user["order"] == 1


async def test_update_ignores_id_in_body(store):
    user = await users_service.create_user(store, {"name": "Ali"})
    updated = await users_service.update_user(
        store, user["id"], {"id": 999, "name": "Vali"},
    )
    assert updated["id"] == user["id"]
    assert updated["name"] == "Vali"


async def test_delete_resequences_survivors_in_relative_order(store):
    created = [
        await users_service.create_user(store, {"name": n}) for n in "abcde"
    ]
    await users_service.delete_user(store, created[1]["id"])
    rows = await users_service.list_users(store)
    assert [r["name"] for r in rows] == ["a", "c", "d", "e"]
    assert [r["order"] for r in rows] == [1, 2, 3, 4]


async def test_delete_repairs_preexisting_gaps(store):
    for name, order in (("a", 2), ("b", 5), ("c", 7), ("d", 11)):
        await store.insert("users", {"name": name, "order": order})
    doomed = (await store.select("users", filters={"name": "c"}))[0]
    await users_service.delete_user(store, doomed["id"])
    rows = await users_service.list_users(store)
    assert [(r["name"], r["order"]) for r in rows] == [("a", 1), ("b", 2), ("d", 3)]


async def test_delete_missing_user_raises_and_changes_nothing(store):
    await users_service.create_user(store, {"name": "a"})
    with pytest.raises(StoreError):
        await users_service.delete_user(store, 404)
    assert len(await users_service.list_users(store)) == 1


@pytest.mark.parametrize("seed_value", [1, 7, 42])
async def test_orders_stay_dense_over_random_sequences(store, seed_value):
    rng = random.Random(seed_value)
    alive: list[int] = []
    for step in range(30):
        if alive and rng.random() < 0.4:
            victim = alive.pop(rng.randrange(len(alive)))
            await users_service.delete_user(store, victim)
            rows = await users_service.list_users(store)
            assert is_dense(r["order"] for r in rows)
            assert [r["order"] for r in rows] == list(range(1, len(rows) + 1))
            assert victim not in {r["id"] for r in rows}
        else:
            before = await users_service.list_users(store)
            user = await users_service.create_user(store, {"name": f"u{step}"})
            expected = max((r["order"] for r in before), default=0) + 1
            assert user["order"] == expected
            alive.append(user["id"])


class _FlakyStore(RecordStore):
    """Store whose order corrections fail for selected ids."""

    def __init__(self, db, failing_ids, error=None):
        super().__init__(db)
        self.failing_ids = set(failing_ids)
        self.error = error or StoreError("connection reset", "update")

    async def update_one(self, table, values, filters):
        if "order" in values and filters.get("id") in self.failing_ids:
            raise self.error
        return await super().update_one(table, values, filters)


async def test_failed_correction_is_skipped_and_logged(test_db, caplog):
    store = RecordStore(test_db)
    created = [
        await users_service.create_user(store, {"name": n}) for n in "abcd"
    ]
    flaky = _FlakyStore(test_db, failing_ids=[created[2]["id"]])

    with caplog.at_level(logging.WARNING, logger="roster_api.services.users"):
        await users_service.delete_user(flaky, created[0]["id"])

    rows = await users_service.list_users(store)
    orders = {r["name"]: r["order"] for r in rows}
    assert orders == {"b": 1, "c": 3, "d": 3}
    assert any("Re-sequencing user" in r.getMessage() for r in caplog.records)


async def test_resequence_reports_failure_count(test_db):
    store = RecordStore(test_db)
    for name, order in (("a", 3), ("b", 6)):
        await store.insert("users", {"name": name, "order": order})
    rows = await store.select("users", order_by="order")
    flaky = _FlakyStore(test_db, failing_ids=[rows[0]["id"]])
    assert await users_service.resequence_users(flaky) == 1


async def test_unexpected_correction_error_is_counted_and_logged(test_db, caplog):
    store = RecordStore(test_db)
    created = [
        await users_service.create_user(store, {"name": n}) for n in "abc"
    ]
    flaky = _FlakyStore(
        test_db, failing_ids=[created[1]["id"]], error=RuntimeError("driver crashed"),
    )

    with caplog.at_level(logging.WARNING, logger="roster_api.services.users"):
        await users_service.delete_user(flaky, created[0]["id"])

    rows = await users_service.list_users(store)
    assert created[0]["id"] not in {r["id"] for r in rows}
    assert {r["name"]: r["order"] for r in rows} == {"b": 2, "c": 2}
    warnings = [r for r in caplog.records if "Re-sequencing user" in r.getMessage()]
    assert len(warnings) == 1
    assert "driver crashed" in warnings[0].getMessage()
    assert warnings[0].exc_info is not None


async def test_unexpected_correction_error_counts_as_failed(test_db):
    store = RecordStore(test_db)
    for name, order in (("a", 3), ("b", 6)):
        await store.insert("users", {"name": name, "order": order})
    rows = await store.select("users", order_by="order")
    flaky = _FlakyStore(
        test_db, failing_ids=[rows[1]["id"]], error=ValueError("bad order"),
    )
    assert await users_service.resequence_users(flaky) == 1
    orders = {r["name"]: r["order"] for r in await store.select("users")}
    assert orders == {"a": 1, "b": 6}


async def test_tied_orders_are_renumbered_by_id(store):
    for name, order in (("p", 5), ("q", 3), ("r", 3), ("s", 1)):
        await store.insert("users", {"name": name, "order": order})
    doomed = (await store.select("users", filters={"name": "s"}))[0]
    await users_service.delete_user(store, doomed["id"])
    rows = await users_service.list_users(store)
    assert [(r["name"], r["order"]) for r in rows] == [("q", 1), ("r", 2), ("p", 3)]


async def test_list_breaks_order_ties_by_id(store):
    for name in ("x", "y", "z"):
        await store.insert("users", {"name": name, "order": 1})
    rows = await users_service.list_users(store)
    ids = [r["id"] for r in rows]
    assert ids == sorted(ids)
