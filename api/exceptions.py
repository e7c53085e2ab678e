"""Custom exceptions and error handling."""

from typing import Any

from fastapi import status


class MapperError(Exception):
    """Base exception for the execution mapper service."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        field: str | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.field = field
        super().__init__(message)


class ValidationError(MapperError):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="validation_error",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            field=field,
        )


class EmptyAuditError(MapperError):
    """Audit carries no issues."""

    def __init__(self, message: str = "Audit contains no issues"):
        super().__init__(
            message=message,
            code="empty_audit",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"issue_count": 0},
        )


class AuditTooLargeError(MapperError):
    """Audit carries more issues than a single plan may hold."""

    def __init__(self, issue_count: int, max_issues: int):
        super().__init__(
            message=(
                f"Audit contains {issue_count} issues; "
                f"at most {max_issues} are allowed per plan"
            ),
            code="audit_too_large",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"issue_count": issue_count, "max_issues": max_issues},
        )
