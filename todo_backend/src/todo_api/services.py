from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .errors import InvalidRequestError, NotFoundError
from .mappers import to_todo_page, to_todo_response
from .repositories import Repository, TodoSearchQuery
from .schemas import TodoPage, TodoResponse
from .utils import page_offset

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoService:
    """
    Read operations over todos.

    The service is stateless apart from its repository, so one instance may
    serve concurrent requests.
    """

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    def get_todo(self, todo_id: int) -> TodoResponse:
        """
        Return the todo with `todo_id` together with its owner summary.

        Raises:
            NotFoundError: no todo has that id.
        """
        todo = self._repo.find_by_id_with_user(todo_id)
        if todo is None:
            logger.info("Todo %s not found", todo_id)
            raise NotFoundError("Todo not found")
        return to_todo_response(todo)

    def get_todos(
        self,
        page: int,
        size: int,
        weather: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> TodoPage:
        """
        Return one page of todos, newest first.

        `page` is 1-indexed. `weather` matches exactly; `start_date` and
        `end_date` bound the creation time inclusively.

        Raises:
            InvalidRequestError: page or size below 1, a date bound carrying a
                UTC offset, or start_date after end_date.
        """
        if page < 1:
            raise InvalidRequestError("page must be greater than or equal to 1")
        if size < 1:
            raise InvalidRequestError("size must be greater than or equal to 1")
        # Stored timestamps are naive local times; zoned bounds cannot be compared.
        if any(d is not None and d.tzinfo is not None for d in (start_date, end_date)):
            raise InvalidRequestError("startDate/endDate must be local date-times without a UTC offset")
        if start_date is not None and end_date is not None and start_date > end_date:
            raise InvalidRequestError("startDate must be before or equal to endDate")

        query = TodoSearchQuery(
            limit=size,
            offset=page_offset(page, size),
            weather=weather,
            start_date=start_date,
            end_date=end_date,
        )
        todos, total = self._repo.find_by_filters(query)
        logger.debug(
            "Listed %d of %d todos (page=%d size=%d weather=%r)",
            len(todos), total, page, size, weather,
        )
        return to_todo_page(todos, total=total, page=page, size=size)
