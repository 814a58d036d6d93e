from __future__ import annotations

from http import HTTPStatus


# PUBLIC_INTERFACE
class ServiceError(Exception):
    """
    Base class for errors raised by the service layer.

    Each subclass carries the HTTP status the API reports for it; the
    exception handlers in main.py render it as an ErrorResponse.
    """

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class InvalidRequestError(ServiceError):
    """Malformed or contradictory request parameters."""

    status_code = HTTPStatus.BAD_REQUEST


# PUBLIC_INTERFACE
class NotFoundError(InvalidRequestError):
    """
    Requested entity does not exist.

    Reported as 400 rather than 404, matching the public API contract.
    """
