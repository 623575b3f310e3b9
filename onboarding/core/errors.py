"""Application error taxonomy.

Every error the services raise toward the HTTP boundary derives from
``AppError`` and carries its own status code; ``main`` installs a single
handler that renders them as ``{"detail": ..., **extra}``.
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, **extra: Any) -> None:
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.detail, **self.extra}


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class MissingFieldsError(ValidationError):
    """Raised once with every missing required field."""

    default_detail = "Missing required fields for your plan"

    def __init__(self, missing_fields: list[str], detail: str | None = None) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(detail, missingFields=self.missing_fields)


class InvalidFieldError(ValidationError):
    """A present field could not be coerced to its type."""

    def __init__(self, field: str, detail: str | None = None) -> None:
        self.field = field
        super().__init__(detail or f"Invalid format for {field}", field=field)


class NotFoundError(AppError):
    """Also raised for malformed ids and for records owned by another tenant."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access to this feature is not enabled for your account"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid or expired token"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
