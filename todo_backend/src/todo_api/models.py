from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TypedDict


# PUBLIC_INTERFACE
class UserRole(str, Enum):
    """Role granted to a user account."""

    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


# PUBLIC_INTERFACE
class UserEntity(TypedDict):
    """
    A user account as stored by the repositories.

    Fields:
    - id: Unique integer identifier
    - email: Login email address
    - nickname: Display name
    - role: UserRole of the account
    """

    id: int
    email: str
    nickname: str
    role: UserRole


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A todo item joined with its owner.

    Repositories always resolve the owner in the same read as the todo, so
    `user` reflects the owner reference at query time.

    Fields:
    - id: Unique integer identifier
    - title: Short title
    - contents: Body text
    - weather: Weather tag recorded when the todo was created (e.g. "Sunny")
    - user: Owning UserEntity
    - created_at: Local creation timestamp (naive datetime)
    - modified_at: Local last modification timestamp (naive datetime)
    """

    id: int
    title: str
    contents: str
    weather: str
    user: UserEntity
    created_at: datetime
    modified_at: datetime
