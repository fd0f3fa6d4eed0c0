"""Exception hierarchy for the staff roster."""

from __future__ import annotations

from fastapi import status


class RosterError(Exception):
    """Base roster error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "roster_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class DuplicateKeyError(RosterError):
    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_key"


class ValidationError(RosterError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"


class NotFoundError(RosterError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ExternalServiceError(RosterError):
    """Raised when the AI parsing service is unavailable or misbehaves."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "external_service_error"


class UnauthorizedError(RosterError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"


class ForbiddenError(RosterError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
