from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Generator, List, Optional, Tuple

from .errors import NotFoundError
from .models import TodoEntity, UserEntity, UserRole
from .repositories import Repository, TodoSearchQuery

# Fixed precision keeps stored timestamps lexicographically comparable.
_TIMESPEC = "microseconds"

# Range of a SQLite INTEGER; larger Python ints cannot be bound.
_SQLITE_MAX_INT = 2**63 - 1

_SELECT_JOINED = """
    SELECT t.id, t.title, t.contents, t.weather, t.created_at, t.modified_at,
           u.id AS user_id, u.email AS user_email, u.nickname AS user_nickname,
           u.role AS user_role
    FROM todos t
    JOIN users u ON u.id = t.user_id
"""


def _to_db(value: datetime) -> str:
    return value.isoformat(timespec=_TIMESPEC)


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
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL UNIQUE,
                    nickname TEXT NOT NULL,
                    role TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    contents TEXT NOT NULL,
                    weather TEXT NOT NULL,
                    user_id INTEGER NOT NULL REFERENCES users(id),
                    created_at TEXT NOT NULL,
                    modified_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_weather ON todos(weather)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_created_at ON todos(created_at)")

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": int(row["id"]),
            "title": str(row["title"]),
            "contents": str(row["contents"]),
            "weather": str(row["weather"]),
            "user": {
                "id": int(row["user_id"]),
                "email": str(row["user_email"]),
                "nickname": str(row["user_nickname"]),
                "role": UserRole(row["user_role"]),
            },
            "created_at": datetime.fromisoformat(row["created_at"]),
            "modified_at": datetime.fromisoformat(row["modified_at"]),
        }

    def add_user(self, email: str, nickname: str, role: UserRole = UserRole.USER) -> UserEntity:
        with self._conn() as conn:
            cur = conn.execute(
                "INSERT INTO users (email, nickname, role) VALUES (?, ?, ?)",
                (email, nickname, role.value),
            )
            return {"id": int(cur.lastrowid), "email": email, "nickname": nickname, "role": role}

    def add_todo(
        self,
        user_id: int,
        title: str,
        contents: str,
        weather: str,
        created_at: Optional[datetime] = None,
    ) -> TodoEntity:
        created = _to_db(created_at or datetime.now())
        with self._conn() as conn:
            owner = conn.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone()
            if owner is None:
                raise NotFoundError("User not found")
            cur = conn.execute(
                """
                INSERT INTO todos (title, contents, weather, user_id, created_at, modified_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (title, contents, weather, user_id, created, created),
            )
            row = conn.execute(f"{_SELECT_JOINED} WHERE t.id = ?", (cur.lastrowid,)).fetchone()
            assert row is not None
            return self._row_to_entity(row)

    def find_by_id_with_user(self, todo_id: int) -> Optional[TodoEntity]:
        if not -_SQLITE_MAX_INT - 1 <= todo_id <= _SQLITE_MAX_INT:
            return None
        with self._conn() as conn:
            row = conn.execute(f"{_SELECT_JOINED} WHERE t.id = ?", (todo_id,)).fetchone()
            return self._row_to_entity(row) if row else None

    def find_by_filters(self, query: TodoSearchQuery) -> Tuple[List[TodoEntity], int]:
        q = query
        clauses = []
        params: list = []

        if q.weather is not None:
            clauses.append("t.weather = ?")
            params.append(q.weather)
        if q.start_date is not None:
            clauses.append("t.created_at >= ?")
            params.append(_to_db(q.start_date))
        if q.end_date is not None:
            clauses.append("t.created_at <= ?")
            params.append(_to_db(q.end_date))

        where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        limit = max(q.limit, 0)
        offset = max(q.offset, 0)

        with self._conn() as conn:
            count_row = conn.execute(
                f"SELECT COUNT(*) AS cnt FROM todos t {where_sql}", params
            ).fetchone()
            total = int(count_row["cnt"]) if count_row else 0
            if limit == 0 or offset >= total:
                return [], total
            limit = min(limit, total - offset)

            rows = conn.execute(
                f"""
                {_SELECT_JOINED}
                {where_sql}
                ORDER BY t.created_at DESC, t.id DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            ).fetchall()
            return [self._row_to_entity(r) for r in rows], total
