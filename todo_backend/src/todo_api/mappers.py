"""Pure conversions from stored entities to API response models."""
from __future__ import annotations

from typing import Iterable

from .models import TodoEntity, UserEntity
from .schemas import TodoPage, TodoResponse, UserResponse
from .utils import pagination_envelope


# PUBLIC_INTERFACE
def to_user_response(user: UserEntity) -> UserResponse:
    """Reduce a user to the owner summary shown on todos."""
    return UserResponse(id=user["id"], email=user["email"])


# PUBLIC_INTERFACE
def to_todo_response(todo: TodoEntity) -> TodoResponse:
    """Build the API view of a todo from the todo and its joined owner."""
    return TodoResponse(
        id=todo["id"],
        title=todo["title"],
        contents=todo["contents"],
        weather=todo["weather"],
        user=to_user_response(todo["user"]),
        created_at=todo["created_at"],
        modified_at=todo["modified_at"],
    )


# PUBLIC_INTERFACE
def to_todo_page(todos: Iterable[TodoEntity], total: int, page: int, size: int) -> TodoPage:
    """Wrap one page of todos with its 1-indexed pagination metadata."""
    envelope = pagination_envelope(
        items=[to_todo_response(t) for t in todos],
        total=total,
        page=page,
        size=size,
    )
    return TodoPage(**envelope)
