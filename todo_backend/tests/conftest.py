import os
from datetime import datetime

import pytest

# Ensure we default to memory backend for tests to avoid filesystem dependencies
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from src.todo_api.db import SQLiteRepository  # noqa: E402
from src.todo_api.models import UserRole  # noqa: E402
from src.todo_api.repositories import InMemoryRepository  # noqa: E402


def seed(repo):
    """
    Populate a repository with two users and five todos spread over October 2024.

    Returns the created todos keyed by title.
    """
    alice = repo.add_user("alice@email.com", "alice")
    bob = repo.add_user("bob@email.com", "bob", UserRole.ADMIN)
    rows = [
        (alice["id"], "Walk", "walk the dog", "sunny", datetime(2024, 9, 30, 9, 0, 0)),
        (alice["id"], "Read", "read a book", "rainy", datetime(2024, 10, 1, 12, 0, 0)),
        (bob["id"], "Run", "morning run", "sunny", datetime(2024, 10, 2, 8, 30, 0)),
        (bob["id"], "Picnic", "lunch outside", "Sunny", datetime(2024, 10, 3, 17, 0, 0)),
        (alice["id"], "Swim", "pool day", "sunny", datetime(2024, 10, 5, 10, 0, 0)),
    ]
    return {
        title: repo.add_todo(user_id, title, contents, weather, created_at=created)
        for user_id, title, contents, weather, created in rows
    }


@pytest.fixture(params=["memory", "sqlite"])
def repo(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteRepository(str(tmp_path / "todos.db"))
    return InMemoryRepository()


@pytest.fixture
def seeded(repo):
    return repo, seed(repo)
