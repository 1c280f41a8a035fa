"""
Error taxonomy shared by the guards and services.

Every error carries a stable ``code``, a user-facing ``message`` and the
HTTP status the API layer answers with. Translation into responses
happens in ``jobboard.api.errors``.
"""

import enum
from typing import Optional


class AppError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "An internal error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(AppError):
    """No valid resolved identity."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class AuthorizationError(AppError):
    """Valid identity, insufficient role or failed ownership check."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Insufficient permissions"


class OwnershipFailure(str, enum.Enum):
    RESOURCE_MISSING = "resource_missing"
    NOT_OWNER = "not_owner"


class OwnershipDenied(AuthorizationError):
    """
    Ownership check failed.

    ``reason`` records whether the resource was missing or belongs to
    someone else. It is for logs only: responses expose the same
    "<Resource> not found" outcome for both.
    """

    def __init__(self, resource: str, resource_id: int, reason: OwnershipFailure):
        self.resource = resource
        self.resource_id = resource_id
        self.reason = reason
        super().__init__(f"{resource} not found")


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Resource already exists"


class DuplicateApplicationError(ConflictError):
    code = "DUPLICATE_APPLICATION"
    default_message = "You have already applied to this job"
