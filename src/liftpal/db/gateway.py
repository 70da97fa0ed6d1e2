"""Persistence gateway: the one place that talks to the database.

Services receive a ``Gateway`` instead of opening connections themselves.
A gateway is bound to the caller's identity, so ``current_identity()`` is
the only way the core learns who is acting.
"""

import json
import logging
import re
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import date, datetime
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from ..errors import AuthError, ConflictError, TransportError
from ..settings import get_db_path

logger = logging.getLogger(__name__)

TABLES = {
    "users",
    "workout_partners",
    "daily_workouts",
    "exercises",
    "exercise_sets",
    "weekly_workouts",
    "available_exercises",
}

# Columns stored as JSON text
JSON_COLUMNS = {"shared_with"}

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")

# (db_path, connection) of the transaction open on the current task
_active: ContextVar[tuple[Path, aiosqlite.Connection] | None] = ContextVar(
    "liftpal_active_transaction", default=None
)


def _check_table(table: str) -> str:
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")
    return table


def _check_column(column: str) -> str:
    if not _IDENTIFIER.match(column):
        raise ValueError(f"Invalid column name: {column}")
    return column


def encode_value(value: Any) -> Any:
    """Convert a Python value to something SQLite stores."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    if hasattr(value, "value"):  # str enums
        return value.value
    return value


def decode_row(row: aiosqlite.Row | None) -> dict | None:
    if row is None:
        return None
    data = dict(row)
    for column in JSON_COLUMNS & data.keys():
        if isinstance(data[column], str):
            data[column] = json.loads(data[column])
    return data


def build_where(filters: dict | None) -> tuple[str, list]:
    """Build a WHERE clause from equality filters.

    ``None`` matches NULL and list values match any member.
    """
    if not filters:
        return "", []

    clauses = []
    params: list = []
    for column, value in filters.items():
        _check_column(column)
        if value is None:
            clauses.append(f"{column} IS NULL")
        elif isinstance(value, (list, tuple, set)):
            values = [encode_value(v) for v in value]
            if not values:
                clauses.append("0")
            else:
                clauses.append(f"{column} IN ({', '.join('?' for _ in values)})")
                params.extend(values)
        else:
            clauses.append(f"{column} = ?")
            params.append(encode_value(value))
    return " WHERE " + " AND ".join(clauses), params


def translate_error(exc: aiosqlite.Error) -> Exception:
    """Map a driver error to the domain taxonomy."""
    if isinstance(exc, aiosqlite.IntegrityError) and "UNIQUE constraint failed" in str(exc):
        return ConflictError(f"Record already exists ({exc})")
    return TransportError(str(exc))


class Gateway:
    """Typed query/command interface over the relational store."""

    def __init__(self, db_path: Path | None = None, user_id: int | None = None):
        self.db_path = db_path or get_db_path()
        self.user_id = user_id

    def as_user(self, user_id: int | None) -> "Gateway":
        """Return a gateway on the same store bound to another identity."""
        return Gateway(self.db_path, user_id=user_id)

    def current_identity(self) -> int:
        """Return the caller's user id, or raise AuthError."""
        if self.user_id is None:
            raise AuthError()
        return self.user_id

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection, committing on clean exit.

        Inside ``transaction()`` the open connection is reused and the
        commit is left to the transaction.
        """
        active = _active.get()
        if active is not None and active[0] == self.db_path:
            yield active[1]
            return

        try:
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                await db.execute("PRAGMA foreign_keys = ON")
                yield db
                await db.commit()
        except aiosqlite.Error as e:
            logger.debug("Store error: %s", e)
            raise translate_error(e) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["Gateway"]:
        """Group gateway calls on this task into one commit.

        Nothing is visible to other connections until the block exits
        cleanly; on error the uncommitted writes are discarded and the error
        propagates unchanged.
        """
        active = _active.get()
        if active is not None and active[0] == self.db_path:
            yield self
            return

        async with self.connect() as db:
            token = _active.set((self.db_path, db))
            try:
                yield self
            finally:
                _active.reset(token)

    # Raw SQL

    async def fetch_all(self, sql: str, params: tuple | list = ()) -> list[dict]:
        async with self.connect() as db:
            cursor = await db.execute(sql, tuple(params))
            rows = await cursor.fetchall()
            return [decode_row(row) for row in rows]

    async def fetch_one(self, sql: str, params: tuple | list = ()) -> dict | None:
        async with self.connect() as db:
            cursor = await db.execute(sql, tuple(params))
            return decode_row(await cursor.fetchone())

    async def execute(self, sql: str, params: tuple | list = ()) -> int:
        """Run a statement and return the affected row count."""
        async with self.connect() as db:
            cursor = await db.execute(sql, tuple(params))
            return cursor.rowcount

    # Table helpers

    async def query(
        self,
        table: str,
        filters: dict | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        """Select rows matching equality filters."""
        where, params = build_where(filters)
        sql = f"SELECT * FROM {_check_table(table)}{where}"
        if order_by:
            sql += f" ORDER BY {_check_column(order_by)} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        return await self.fetch_all(sql, params)

    async def insert(self, table: str, record: dict) -> dict:
        """Insert one row and return it as stored."""
        _check_table(table)
        columns = [_check_column(c) for c in record]
        placeholders = ", ".join("?" for _ in columns)
        async with self.connect() as db:
            cursor = await db.execute(
                f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                tuple(encode_value(v) for v in record.values()),
            )
            row_id = cursor.lastrowid
            cursor = await db.execute(f"SELECT * FROM {table} WHERE id = ?", (row_id,))
            return decode_row(await cursor.fetchone())

    async def insert_many(self, table: str, records: list[dict]) -> int:
        """Insert several rows with the same columns."""
        if not records:
            return 0
        _check_table(table)
        columns = [_check_column(c) for c in records[0]]
        placeholders = ", ".join("?" for _ in columns)
        async with self.connect() as db:
            await db.executemany(
                f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                [tuple(encode_value(r[c]) for c in columns) for r in records],
            )
        return len(records)

    async def update(self, table: str, filters: dict, patch: dict) -> int:
        """Update matching rows and return how many changed."""
        if not patch:
            return 0
        assignments = ", ".join(f"{_check_column(c)} = ?" for c in patch)
        where, params = build_where(filters)
        return await self.execute(
            f"UPDATE {_check_table(table)} SET {assignments}{where}",
            [encode_value(v) for v in patch.values()] + params,
        )

    async def delete(self, table: str, filters: dict) -> int:
        """Delete matching rows and return how many were removed."""
        where, params = build_where(filters)
        if not where:
            raise ValueError("Refusing to delete without a filter")
        return await self.execute(f"DELETE FROM {_check_table(table)}{where}", params)

    async def upsert(self, table: str, record: dict, conflict: tuple[str, ...]) -> dict:
        """Insert a row, or overwrite the row with the same conflict key."""
        _check_table(table)
        columns = [_check_column(c) for c in record]
        updates = [c for c in columns if c not in conflict]
        placeholders = ", ".join("?" for _ in columns)
        sql = (
            f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
            f"ON CONFLICT({', '.join(_check_column(c) for c in conflict)}) "
        )
        if updates:
            sql += "DO UPDATE SET " + ", ".join(f"{c} = excluded.{c}" for c in updates)
        else:
            sql += "DO NOTHING"

        key = {c: record[c] for c in conflict}
        where, params = build_where(key)
        async with self.connect() as db:
            await db.execute(sql, tuple(encode_value(v) for v in record.values()))
            cursor = await db.execute(f"SELECT * FROM {table}{where}", tuple(params))
            return decode_row(await cursor.fetchone())
