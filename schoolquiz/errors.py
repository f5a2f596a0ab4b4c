"""Error taxonomy shared by services and route handlers.

Every error carries the message that is sent to the client verbatim as
``{"message": ...}`` and the HTTP status it maps to.
"""
from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed or missing input"""
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidState(AppError):
    """Operation not allowed in the resource's current state"""
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
