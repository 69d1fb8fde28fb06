from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import aiosqlite

from dashboard.domain.common.errors import RemoteStoreError, ValidationError
from dashboard.domain.common.time import to_utc_iso
from dashboard.domain.items.models import NOTES_TABLE, TASKS_TABLE
from dashboard.domain.items.ports import Clock, IdGenerator, RemoteStore, RemoteTable
from dashboard.infra.db.connection import Database

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSpec:
    name: str
    writable: tuple[str, ...]
    booleans: tuple[str, ...] = ()
    has_updated_at: bool = False

    @property
    def orderable(self) -> tuple[str, ...]:
        cols = ("created_at", "updated_at") if self.has_updated_at else ("created_at",)
        return cols + self.writable


TABLES: dict[str, TableSpec] = {
    TASKS_TABLE: TableSpec(name=TASKS_TABLE, writable=("text", "completed"), booleans=("completed",)),
    NOTES_TABLE: TableSpec(name=NOTES_TABLE, writable=("title", "content"), has_updated_at=True),
}


class SqliteTable(RemoteTable):
    """
    Row-scoped table on SQLite. Every statement carries `user_id = ?`,
    so rows of other owners are invisible and untouchable.
    id / user_id / timestamps are server-computed here, never taken from the caller.
    """

    def __init__(self, db: Database, spec: TableSpec, clock: Clock, ids: IdGenerator) -> None:
        self._db = db
        self._spec = spec
        self._clock = clock
        self._ids = ids

    async def select(
        self,
        owner_id: str,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[dict[str, Any]]:
        if order_by not in self._spec.orderable:
            raise ValidationError(f"Cannot order {self._spec.name} by {order_by!r}")
        direction = "DESC" if descending else "ASC"
        try:
            rows = await self._db.fetchall(
                f"""
                SELECT *
                FROM {self._spec.name}
                WHERE user_id = ?
                ORDER BY {order_by} {direction}, rowid {direction};
                """,
                (owner_id,),
            )
        except aiosqlite.Error as e:
            raise RemoteStoreError(f"select from {self._spec.name} failed: {e}") from e
        return [self._row_to_dict(r) for r in rows]

    async def insert(self, owner_id: str, values: Mapping[str, Any]) -> dict[str, Any]:
        self._check_columns(values)
        now_iso = to_utc_iso(self._clock.now())

        row: dict[str, Any] = {"id": self._ids.new_id(), "user_id": owner_id}
        row.update(values)
        row["created_at"] = now_iso
        if self._spec.has_updated_at:
            row["updated_at"] = now_iso

        cols = list(row)
        placeholders = ", ".join("?" for _ in cols)
        try:
            await self._db.execute(
                f"INSERT INTO {self._spec.name}({', '.join(cols)}) VALUES ({placeholders});",
                [self._to_db(c, row[c]) for c in cols],
            )
        except aiosqlite.Error as e:
            raise RemoteStoreError(f"insert into {self._spec.name} failed: {e}") from e
        return row

    async def update(self, row_id: str, owner_id: str, values: Mapping[str, Any]) -> int:
        self._check_columns(values)
        if not values:
            return 0

        assignments = dict(values)
        if self._spec.has_updated_at:
            assignments["updated_at"] = to_utc_iso(self._clock.now())

        set_sql = ", ".join(f"{c} = ?" for c in assignments)
        params = [self._to_db(c, v) for c, v in assignments.items()] + [row_id, owner_id]
        try:
            changed = await self._db.execute(
                f"UPDATE {self._spec.name} SET {set_sql} WHERE id = ? AND user_id = ?;",
                params,
            )
        except aiosqlite.Error as e:
            raise RemoteStoreError(f"update of {self._spec.name} failed: {e}") from e
        if changed == 0:
            logger.debug("update matched no row table=%s id=%s owner_id=%s", self._spec.name, row_id, owner_id)
        return changed

    async def delete(self, row_id: str, owner_id: str) -> int:
        try:
            changed = await self._db.execute(
                f"DELETE FROM {self._spec.name} WHERE id = ? AND user_id = ?;",
                (row_id, owner_id),
            )
        except aiosqlite.Error as e:
            raise RemoteStoreError(f"delete from {self._spec.name} failed: {e}") from e
        if changed == 0:
            logger.debug("delete matched no row table=%s id=%s owner_id=%s", self._spec.name, row_id, owner_id)
        return changed

    def _check_columns(self, values: Mapping[str, Any]) -> None:
        unknown = [c for c in values if c not in self._spec.writable]
        if unknown:
            raise ValidationError(f"Unknown column(s) for {self._spec.name}: {', '.join(unknown)}")

    def _to_db(self, column: str, value: Any) -> Any:
        if column in self._spec.booleans:
            return 1 if value else 0
        return value

    def _row_to_dict(self, row) -> dict[str, Any]:
        out = dict(row)
        for c in self._spec.booleans:
            out[c] = bool(out[c])
        return out


class SqliteRemoteStore(RemoteStore):
    def __init__(self, db: Database, clock: Clock, ids: IdGenerator) -> None:
        self._tables = {name: SqliteTable(db, spec, clock, ids) for name, spec in TABLES.items()}

    def table(self, name: str) -> RemoteTable:
        try:
            return self._tables[name]
        except KeyError:
            raise ValidationError(f"Unknown table {name!r}") from None
