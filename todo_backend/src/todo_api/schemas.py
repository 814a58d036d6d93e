from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Base for response models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class UserResponse(_CamelModel):
    """
    Owner summary embedded in a TodoResponse.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": 1, "email": "user@email.com"}},
    )

    id: int = Field(..., description="Unique identifier of the user")
    email: str = Field(..., description="Email address of the user")


# PUBLIC_INTERFACE
class TodoResponse(_CamelModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Title",
                "contents": "contents",
                "weather": "sunny",
                "user": {"id": 1, "email": "user@email.com"},
                "createdAt": "2024-10-01T12:00:00",
                "modifiedAt": "2024-10-01T12:00:00",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    contents: str = Field(..., description="Body text of the todo item")
    weather: str = Field(..., description="Weather tag recorded at creation")
    user: UserResponse = Field(..., description="Owner of the todo item")
    created_at: datetime = Field(..., description="Creation timestamp")
    modified_at: datetime = Field(..., description="Last modification timestamp")


# PUBLIC_INTERFACE
class TodoPage(_CamelModel):
    """
    Envelope for paginated todo listings.

    `page` is echoed back 1-indexed, as the client requested it.
    """

    content: List[TodoResponse] = Field(..., description="Todos on this page, newest first")
    page: int = Field(..., description="1-indexed page number")
    size: int = Field(..., description="Requested page size")
    total_elements: int = Field(..., description="Total number of todos matching the filters")
    total_pages: int = Field(..., description="Number of pages for the given size")
    number_of_elements: int = Field(..., description="Number of todos on this page")
    first: bool = Field(..., description="Whether this is the first page")
    last: bool = Field(..., description="Whether this is the last page")
    empty: bool = Field(..., description="Whether this page has no content")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """
    Body returned for every failed request.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"status": "BAD_REQUEST", "code": 400, "message": "Todo not found"}
        }
    )

    status: str = Field(..., description="HTTP status name, e.g. BAD_REQUEST")
    code: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human readable error message")
