from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List, Optional

from .models import TodoEntity
from .repositories import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    name: str = "name"
    name_key: str = "name_key"
    description: str = "description"
    priority: str = "priority"
    completed: str = "completed"


_COLS = _Cols()


def _name_key(name: str) -> str:
    # Normalized form used for case-insensitive lookups
    return name.lower()


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.name} TEXT NOT NULL,
                    {_COLS.name_key} TEXT NOT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.priority} INTEGER NULL,
                    {_COLS.completed} INTEGER NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_priority ON {_COLS.table}({_COLS.priority})"
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_name_key ON {_COLS.table}({_COLS.name_key})"
            )
        logger.debug("Initialized sqlite schema in %s", self._db_path)

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        completed = row[_COLS.completed]
        return {
            "id": int(row[_COLS.id]),
            "name": str(row[_COLS.name]),
            "description": row[_COLS.description],
            "priority": row[_COLS.priority],
            "completed": None if completed is None else bool(completed),
        }

    def _select(self, where_sql: str = "", params: tuple = ()) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {_COLS.table} {where_sql}", params).fetchall()
            return [self._row_to_entity(r) for r in rows]

    def _exists(self, where_sql: str, params: tuple) -> bool:
        with self._conn() as conn:
            row = conn.execute(f"SELECT 1 FROM {_COLS.table} WHERE {where_sql} LIMIT 1", params).fetchone()
            return row is not None

    def list_all(self) -> List[TodoEntity]:
        # NULL sorts lowest in sqlite, so DESC leaves unprioritized records last
        return self._select(f"ORDER BY {_COLS.priority} DESC, {_COLS.name} ASC")

    def find_by_id(self, todo_id: int) -> Optional[TodoEntity]:
        found = self._select(f"WHERE {_COLS.id} = ?", (todo_id,))
        return found[0] if found else None

    def find_by_priority(self, priority: int) -> List[TodoEntity]:
        return self._select(f"WHERE {_COLS.priority} = ? ORDER BY {_COLS.id}", (priority,))

    def find_by_name_ignore_case(self, name: str) -> List[TodoEntity]:
        return self._select(f"WHERE {_COLS.name_key} = ? ORDER BY {_COLS.id}", (_name_key(name),))

    def exists_by_id(self, todo_id: int) -> bool:
        return self._exists(f"{_COLS.id} = ?", (todo_id,))

    def exists_by_priority(self, priority: int) -> bool:
        return self._exists(f"{_COLS.priority} = ?", (priority,))

    def exists_by_name(self, name: str) -> bool:
        return self._exists(f"{_COLS.name_key} = ?", (_name_key(name),))

    def save(self, entity: TodoEntity) -> TodoEntity:
        completed = entity["completed"]
        values = (
            entity["name"],
            _name_key(entity["name"]),
            entity["description"],
            entity["priority"],
            None if completed is None else int(completed),
        )
        with self._conn() as conn:
            if entity["id"] is None:
                cur = conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.name}, {_COLS.name_key}, {_COLS.description},
                        {_COLS.priority}, {_COLS.completed})
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    values,
                )
                todo_id = cur.lastrowid
            else:
                todo_id = entity["id"]
                conn.execute(
                    f"""
                    INSERT OR REPLACE INTO {_COLS.table} ({_COLS.id}, {_COLS.name}, {_COLS.name_key},
                        {_COLS.description}, {_COLS.priority}, {_COLS.completed})
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (todo_id, *values),
                )
        return {
            "id": int(todo_id),
            "name": entity["name"],
            "description": entity["description"],
            "priority": entity["priority"],
            "completed": completed,
        }

    def delete_by_id(self, todo_id: int) -> None:
        with self._conn() as conn:
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
