from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..repositories import Repository, get_repository
from ..schemas import ErrorResponse, TodoPage, TodoResponse
from ..services import TodoService
from ..settings import get_settings

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

_DEFAULT_PAGE_SIZE = get_settings().default_page_size


# PUBLIC_INTERFACE
def get_todo_service(repo: Repository = Depends(get_repository)) -> TodoService:
    """
    Dependency providing a TodoService bound to the configured repository.
    Tests override this through app.dependency_overrides.
    """
    return TodoService(repo)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TodoPage,
    summary="List Todos",
    description=(
        "List todos newest first with optional filters and pagination.\n\n"
        "Query parameters:\n"
        "- page: 1-indexed page number (>=1)\n"
        "- size: page size (>=1)\n"
        "- weather: exact, case-sensitive weather tag\n"
        "- startDate / endDate: inclusive bounds on the creation time, "
        "ISO8601 local date-times such as 2024-10-01T12:00:00\n\n"
        "Returns a page envelope with content and pagination metadata."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        400: {"model": ErrorResponse, "description": "Invalid query parameters"},
    },
)
def get_todos(
    page: int = Query(1, description="1-indexed page number"),
    size: int = Query(_DEFAULT_PAGE_SIZE, description="Maximum number of items per page"),
    weather: Optional[str] = Query(None, description="Exact weather tag to match"),
    start_date: Optional[datetime] = Query(
        None, alias="startDate", description="Earliest creation time (inclusive)"
    ),
    end_date: Optional[datetime] = Query(
        None, alias="endDate", description="Latest creation time (inclusive)"
    ),
    service: TodoService = Depends(get_todo_service),
) -> TodoPage:
    """
    List todos with pagination and filters.
    """
    return service.get_todos(page, size, weather, start_date, end_date)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Get Todo",
    description="Get a single Todo item by ID, including its owner summary.",
    responses={
        200: {"description": "Todo found"},
        400: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def get_todo(todo_id: int, service: TodoService = Depends(get_todo_service)) -> TodoResponse:
    """
    Retrieve a single Todo item by its ID.
    """
    return service.get_todo(todo_id)
