"""Record Store — table-level select/insert/update/delete over open JSON records.

Invariants:
    - Callers see flat dict records; fixed columns (Model.FIELDS) and the
      `attributes` open map are merged on read and split on write
    - Every call commits on its own: no transaction spans two store calls
    - Every failure surfaces as StoreError carrying the store's message as detail
    - update_one/delete_one treat "no matching row" as a StoreError

Design Decisions:
    - Table registry keyed by the store's table names: routes and services speak
      in tables and filters, not ORM classes (ADR: passthrough gateway)
    - Updates merge the open map key-by-key: a body only changes the fields it names
    - Filters are equality-only; None compares with IS NULL
"""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import delete as sa_delete, select as sa_select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster_api.core.domain_types import Record, Table
from roster_api.core.errors import ErrorContext, StoreError
from roster_api.db.base import Base
from roster_api.infrastructure.database import describe_db_error, get_db
from roster_api.models import AttendanceHistory, User

logger = logging.getLogger(__name__)

OPEN_MAP_COLUMN = "attributes"
NO_SINGLE_ROW = "JSON object requested, multiple (or no) rows returned"
NO_ROWS_DELETED = "No rows matched the delete filter"

_TABLES: dict[str, type[Base]] = {
    Table.USERS.value: User,
    Table.ATTENDANCE_HISTORY.value: AttendanceHistory,
}


def to_record(row: Base) -> Record:
    """Flatten an ORM row into the client-facing record."""
    record = dict(getattr(row, OPEN_MAP_COLUMN) or {})
    for name in row.FIELDS:
        record[name] = getattr(row, name)
    return record


def split_record(model: type[Base], record: Record) -> tuple[dict, dict]:
    """Split a flat record into (fixed column values, open map values)."""
    columns: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in record.items():
        if key in model.FIELDS:
            columns[key] = value
        else:
            extra[key] = value
    return columns, extra


class RecordStore:
    """Store client bound to one request's AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Queries ─────────────────────────────────────────────────

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | tuple[str, ...] | None = None,
        ascending: bool = True,
        limit: int | None = None,
        columns: tuple[str, ...] | None = None,
    ) -> list[Record]:
        """Rows matching every filter, optionally ordered, limited and projected.

        A tuple order_by sorts by each column in turn, all in one direction.
        """
        model = self._model(table, "select")
        query = sa_select(model).where(*self._where(model, table, filters))
        if isinstance(order_by, str):
            order_by = (order_by,)
        for name in order_by or ():
            column = self._column(model, table, name, "select")
            query = query.order_by(column.asc() if ascending else column.desc())
        if limit is not None:
            query = query.limit(limit)
        for name in columns or ():
            self._column(model, table, name, "select")

        try:
            rows = (await self._db.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            await self._fail(e, table, "select")

        records = [to_record(row) for row in rows]
        if columns:
            records = [{name: r.get(name) for name in columns} for r in records]
        return records

    # ─── Mutations ───────────────────────────────────────────────

    async def insert(self, table: str, record: Record) -> Record:
        """Insert one record and return it as stored (with generated id)."""
        model = self._model(table, "insert")
        values, extra = split_record(model, record)
        row = model(**values, **{OPEN_MAP_COLUMN: extra})
        try:
            self._db.add(row)
            await self._db.commit()
            await self._db.refresh(row)
        except SQLAlchemyError as e:
            await self._fail(e, table, "insert")
        logger.debug(f"Inserted into {table}", extra={"table": table, "record_id": row.id})
        return to_record(row)

    async def update(
        self, table: str, values: Record, filters: dict[str, Any],
    ) -> list[Record]:
        """Field-wise update of every matching row; returns the updated rows."""
        return await self._update(table, values, filters, single=False)

    async def update_one(
        self, table: str, values: Record, filters: dict[str, Any],
    ) -> Record:
        """Field-wise update of exactly one row; no match is a StoreError."""
        rows = await self._update(table, values, filters, single=True)
        return rows[0]

    async def delete(self, table: str, filters: dict[str, Any]) -> int:
        """Delete matching rows; returns how many were removed."""
        model = self._model(table, "delete")
        statement = sa_delete(model).where(*self._where(model, table, filters))
        try:
            result = await self._db.execute(statement)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._fail(e, table, "delete")
        return result.rowcount or 0

    async def delete_one(self, table: str, filters: dict[str, Any]) -> None:
        """Delete matching rows; matching nothing is a StoreError."""
        if await self.delete(table, filters) == 0:
            raise StoreError(
                NO_ROWS_DELETED, "delete",
                ErrorContext(table=table, record_id=filters.get("id")),
            )

    # ─── Internals ───────────────────────────────────────────────

    async def _update(
        self, table: str, values: Record, filters: dict[str, Any], single: bool,
    ) -> list[Record]:
        model = self._model(table, "update")
        columns, extra = split_record(model, values)
        query = sa_select(model).where(*self._where(model, table, filters))
        try:
            rows = (await self._db.execute(query)).scalars().all()
            if single and len(rows) != 1:
                raise StoreError(
                    NO_SINGLE_ROW, "update",
                    ErrorContext(table=table, record_id=filters.get("id")),
                )
            for row in rows:
                for name, value in columns.items():
                    setattr(row, name, value)
                if extra:
                    # reassign so the JSON column is flagged dirty
                    merged = {**(getattr(row, OPEN_MAP_COLUMN) or {}), **extra}
                    setattr(row, OPEN_MAP_COLUMN, merged)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._fail(e, table, "update")
        return [to_record(row) for row in rows]

    def _model(self, table: str, operation: str) -> type[Base]:
        model = _TABLES.get(table)
        if model is None:
            raise StoreError(
                f'relation "{table}" does not exist', operation,
                ErrorContext(table=table),
            )
        return model

    def _column(self, model: type[Base], table: str, name: str, operation: str):
        if name not in model.FIELDS:
            raise StoreError(
                f"column {table}.{name} does not exist", operation,
                ErrorContext(table=table),
            )
        return getattr(model, name)

    def _where(
        self, model: type[Base], table: str, filters: dict[str, Any] | None,
    ) -> list:
        clauses = []
        for name, value in (filters or {}).items():
            column = self._column(model, table, name, "filter")
            clauses.append(column.is_(None) if value is None else column == value)
        return clauses

    async def _fail(self, exc: SQLAlchemyError, table: str, operation: str):
        await self._db.rollback()
        detail = describe_db_error(exc)
        logger.error(
            f"Store {operation} on {table} failed: {detail}",
            extra={"table": table},
        )
        raise StoreError(detail, operation, ErrorContext(table=table)) from exc


async def get_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """FastAPI dependency: a store bound to the request's session."""
    return RecordStore(db)
