"""Domain error hierarchy.

业务层只抛出 DomainException 的子类。HTTP 层读取类属性 http_status_code /
error_code 生成响应，并把 details 原样放进 error.details。
"""

from typing import Any

from fastapi import status


class DomainException(Exception):
    """Root of every error raised by catalog and listing code."""

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str = "Request could not be processed",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class EntityNotFoundError(DomainException):
    """The addressed record is missing or soft-deleted."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str | None = None):
        if entity_id is None:
            super().__init__(f"{entity_type} not found")
        else:
            super().__init__(
                f"{entity_type} '{entity_id}' not found",
                {"entity": entity_type, "id": entity_id},
            )


class ValidationError(DomainException):
    """Input that no fallback rule can repair."""

    error_code = "VALIDATION_ERROR"


class AuthorizationError(DomainException):
    """Caller is known but may not act on the resource."""

    http_status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
