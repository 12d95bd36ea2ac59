"""
Domain errors.

Services raise these; the handlers registered in jobly.main turn them into
HTTP responses. Nothing below the API layer imports FastAPI.
"""

from typing import List, Optional, Union


class JoblyError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[Union[str, List[str]]] = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    """Invalid input, forbidden field, empty update or inverted filter range."""

    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    status_code = 404
    default_message = "Not Found"


class InternalError(JoblyError):
    status_code = 500
