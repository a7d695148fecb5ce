from __future__ import annotations

import asyncio
import logging
import os
import sqlite3
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any, Generator, List, Mapping

from .exceptions import RepositoryError
from .models import TodoRecord
from .repositories import TodoRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    loki: str = "loki"
    id: str = "id"
    text: str = "text"
    when: str = "when_at"
    status: str = "status"
    created: str = "created"


_COLS = _Cols()


def _when_to_text(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return "" if value is None else str(value)


class SQLiteRepository(TodoRepository):
    """
    Lightweight SQLite repository implementing the TodoRepository interface.

    sqlite3 is blocking, so every call runs in a worker thread with its own
    connection.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._run(self._init_db)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _run(self, fn, *args):
        try:
            return fn(*args)
        except sqlite3.Error as e:
            logger.error("sqlite call %s failed: %s", fn.__name__, e)
            raise RepositoryError(f"sqlite {fn.__name__} failed: {e}") from e

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.loki} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.id} TEXT NOT NULL,
                    {_COLS.text} TEXT NOT NULL,
                    {_COLS.when} TEXT NOT NULL,
                    {_COLS.status} TEXT NOT NULL,
                    {_COLS.created} INTEGER NOT NULL
                )
                """
            )

    def _row_to_record(self, row: sqlite3.Row) -> TodoRecord:
        return {  # type: ignore[return-value]
            "text": str(row[_COLS.text]),
            "when": str(row[_COLS.when]),
            "status": str(row[_COLS.status]),
            "id": str(row[_COLS.id]),
            "meta": {"revision": 0, "created": int(row[_COLS.created]), "version": 0},
            "$loki": int(row[_COLS.loki]),
        }

    def _list(self) -> List[TodoRecord]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.loki} ASC"
            ).fetchall()
            return [self._row_to_record(r) for r in rows]

    def _create(self, record: Mapping[str, Any]) -> TodoRecord:
        created = int(time.time() * 1000)
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.text}, {_COLS.when},
                    {_COLS.status}, {_COLS.created})
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    record.get("id", ""),
                    record.get("text", ""),
                    _when_to_text(record.get("when")),
                    record.get("status", ""),
                    created,
                ),
            )
            row = conn.execute(
                f"SELECT * FROM {_COLS.table} WHERE {_COLS.loki} = ?", (cur.lastrowid,)
            ).fetchone()
            assert row is not None
            return self._row_to_record(row)

    async def list(self) -> List[TodoRecord]:
        return await asyncio.to_thread(self._run, self._list)

    async def create(self, record: Mapping[str, Any]) -> TodoRecord:
        return await asyncio.to_thread(self._run, self._create, record)
