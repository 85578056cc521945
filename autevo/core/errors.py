# autevo/core/errors.py
"""
Categorical error taxonomy.

Every access or invariant violation is raised as one of these at the point
of the failed check and rendered by the exception handler in `autevo.main`.
"""
from typing import Optional


class AppError(Exception):
    """Base class for errors surfaced to API callers"""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class UnauthenticatedError(AppError):
    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Login required"


class ForbiddenError(AppError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Forbidden"


class RoleForbiddenError(ForbiddenError):
    """Caller's role is below the tier the operation requires"""

    default_message = "Insufficient permissions"

    def __init__(self, required_tier, operation: Optional[str] = None):
        self.required_tier = required_tier
        self.operation = operation
        super().__init__(f"Requires {required_tier.label} role or higher")


class TenantStatusForbiddenError(ForbiddenError):
    """Tenant account is not in a status that permits normal operation"""

    def __init__(self, tenant_status, message: str):
        self.tenant_status = tenant_status
        super().__init__(message)


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class BadRequestError(AppError):
    code = "BAD_REQUEST"
    status_code = 400
    default_message = "Bad request"


class InvalidTransitionError(BadRequestError):
    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"invalid transition: {current.value} → {requested.value}")


class InvariantViolationError(BadRequestError):
    pass


class ConflictError(AppError):
    code = "CONFLICT"
    status_code = 409
    default_message = "Conflict"


class PreconditionFailedError(AppError):
    code = "PRECONDITION_FAILED"
    status_code = 412
    default_message = "Precondition failed"
