from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from threading import RLock
from typing import Iterable, List, Optional, Tuple

from .errors import NotFoundError
from .models import TodoEntity, UserEntity, UserRole
from .settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodoSearchQuery:
    """
    Filters and page window for listing todos.

    Bounds on created_at are inclusive; None means unbounded.
    """
    limit: int = 10
    offset: int = 0
    weather: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def add_user(self, email: str, nickname: str, role: UserRole = UserRole.USER) -> UserEntity:
        """Create and return a new UserEntity."""

    @abstractmethod
    def add_todo(
        self,
        user_id: int,
        title: str,
        contents: str,
        weather: str,
        created_at: Optional[datetime] = None,
    ) -> TodoEntity:
        """
        Create and return a new TodoEntity owned by `user_id`.
        Raises NotFoundError if the user does not exist.
        """

    @abstractmethod
    def find_by_id_with_user(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity joined with its owner, or None if not found."""

    @abstractmethod
    def find_by_filters(self, query: TodoSearchQuery) -> Tuple[List[TodoEntity], int]:
        """
        Return a slice of TodoEntities and the total count matching filters.
        - Exact, case-sensitive match on weather
        - Inclusive created_at window
        - Ordered by created_at desc, then id desc
        - Supports limit/offset
        """


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._users: dict[int, UserEntity] = {}
        self._todos: dict[int, dict] = {}
        self._next_user_id = 1
        self._next_todo_id = 1

    def _now(self) -> datetime:
        return datetime.now()

    def _join(self, row: dict) -> TodoEntity:
        # Rows hold user_id; the owner is resolved on every read.
        entity = {k: v for k, v in row.items() if k != "user_id"}
        entity["user"] = copy.copy(self._users[row["user_id"]])
        return entity  # type: ignore[return-value]

    def add_user(self, email: str, nickname: str, role: UserRole = UserRole.USER) -> UserEntity:
        with self._lock:
            user: UserEntity = {
                "id": self._next_user_id,
                "email": email,
                "nickname": nickname,
                "role": role,
            }
            self._next_user_id += 1
            self._users[user["id"]] = user
            return copy.copy(user)

    def add_todo(
        self,
        user_id: int,
        title: str,
        contents: str,
        weather: str,
        created_at: Optional[datetime] = None,
    ) -> TodoEntity:
        created = created_at or self._now()
        with self._lock:
            if user_id not in self._users:
                raise NotFoundError("User not found")
            row = {
                "id": self._next_todo_id,
                "title": title,
                "contents": contents,
                "weather": weather,
                "user_id": user_id,
                "created_at": created,
                "modified_at": created,
            }
            self._next_todo_id += 1
            self._todos[row["id"]] = row
            return self._join(row)

    def find_by_id_with_user(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            row = self._todos.get(todo_id)
            return None if row is None else self._join(row)

    def find_by_filters(self, query: TodoSearchQuery) -> Tuple[List[TodoEntity], int]:
        q = query
        with self._lock:
            rows: Iterable[dict] = self._todos.values()

            if q.weather is not None:
                rows = [r for r in rows if r["weather"] == q.weather]
            if q.start_date is not None:
                rows = [r for r in rows if r["created_at"] >= q.start_date]
            if q.end_date is not None:
                rows = [r for r in rows if r["created_at"] <= q.end_date]

            rows_sorted = sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)
            total = len(rows_sorted)

            start = max(q.offset, 0)
            end = start + max(q.limit, 0)
            return [self._join(r) for r in rows_sorted[start:end]], total


_DEMO_TODOS = [
    ("Walk the dog", "Around the park before work", "Sunny", datetime(2024, 10, 1, 8, 0, 0)),
    ("Buy an umbrella", "The forecast says rain all week", "Rain", datetime(2024, 10, 2, 12, 30, 0)),
    ("Picnic", "Sandwiches and lemonade", "Sunny", datetime(2024, 10, 3, 17, 0, 0)),
]


# PUBLIC_INTERFACE
def seed_demo_data(repo: Repository) -> bool:
    """
    Fill an empty store with one demo user and a few todos.

    Returns False without writing anything when the store already holds todos.
    """
    _, total = repo.find_by_filters(TodoSearchQuery(limit=0))
    if total:
        return False
    owner = repo.add_user("demo@email.com", "demo")
    for title, contents, weather, created in _DEMO_TODOS:
        repo.add_todo(owner["id"], title, contents, weather, created_at=created)
    logger.info("Seeded %d demo todos", len(_DEMO_TODOS))
    return True


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Return the process-wide repository configured by settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository backed by settings.sqlite_db_path
    Demo data is added when SEED_DEMO_DATA is enabled.
    """
    settings = get_settings()
    repo: Repository
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using SQLite repository at %s", settings.sqlite_db_path)
        repo = SQLiteRepository(settings.sqlite_db_path)
    else:
        logger.info("Using in-memory repository")
        repo = InMemoryRepository()
    if settings.seed_demo_data:
        seed_demo_data(repo)
    return repo
