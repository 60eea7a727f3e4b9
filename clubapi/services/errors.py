"""Exceptions shared by the club use cases; routers map them to HTTP responses."""
from __future__ import annotations


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    """Raised when a payload is missing required fields or breaks a rule."""


class ConflictError(ServiceError):
    """Raised when a unique value (jersey number, username) is already taken."""


class NotFoundError(ServiceError):
    status_code = 404


class ForbiddenError(ServiceError):
    status_code = 403


class InvalidCredentialsError(ServiceError):
    status_code = 401
