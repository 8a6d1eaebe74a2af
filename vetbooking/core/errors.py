"""Typed failures raised by the scheduling services.

Routes translate these into HTTP responses; services never build HTTP
responses themselves.
"""

from typing import Any

from fastapi import HTTPException, status


class SchedulingError(Exception):
    """Base class for every failure the scheduling core reports to callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'error'

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_detail(self) -> dict[str, Any]:
        return {'code': self.code, 'message': self.message}

    def to_http(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=self.to_detail())


class InputValidationError(SchedulingError, ValueError):
    """Malformed input. Also a ValueError so pydantic validators can raise it."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = 'invalid'

    def __init__(self, message: str, *, code: str | None = None, fields: list[str] | None = None) -> None:
        super().__init__(message, code=code)
        self.fields = fields or []

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        detail['fields'] = self.fields
        return detail


class NotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = 'not-found'

    def __init__(self, resource: str, message: str | None = None) -> None:
        super().__init__(message or f'{resource.capitalize()} not found.')
        self.resource = resource

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        detail['resource'] = self.resource
        return detail


class ConflictError(SchedulingError):
    """The request collides with existing ledger state.

    ``existing`` carries the conflicting record so a client can show what
    occupies the slot.
    """

    status_code = status.HTTP_409_CONFLICT
    code = 'conflict'

    def __init__(self, reason: str, message: str, existing: dict[str, Any] | None = None) -> None:
        super().__init__(message, code=reason)
        self.reason = reason
        self.existing = existing

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        if self.existing is not None:
            detail['existing_appointment'] = self.existing
        return detail


class InternalError(SchedulingError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = 'internal'

    def __init__(self, message: str = 'Database unavailable. Verify DATABASE_URL and database credentials.') -> None:
        super().__init__(message)
