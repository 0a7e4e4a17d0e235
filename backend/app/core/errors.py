"""
Error hierarchy for the budget server.

Every error carries a stable code, an HTTP status and a user-safe message.
Driver errors and stack traces are logged, never placed in `message`.
"""
from typing import Any, Dict, Optional

ERR_DATABASE_ACCESS = "Database access error"
ERR_DATABASE_OPERATION = "Database operation failed"
ERR_UNAUTHORIZED = "Not logged in"
ERR_INVALID_CREDENTIALS = "Invalid credentials"


class BudgetError(Exception):
    """Base exception for all budget server errors."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        """Convert to the JSON error body."""
        return {"detail": self.message, "code": self.code}


class BadInput(BudgetError):
    """Malformed or out-of-range client data."""

    code = "BAD_INPUT"
    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_response(self) -> Dict[str, Any]:
        response = super().to_response()
        if self.field:
            response["field"] = self.field
        return response


class Unauthenticated(BudgetError):
    """No session, or a session without a user."""

    code = "UNAUTHENTICATED"
    http_status = 401

    def __init__(self, message: str = ERR_UNAUTHORIZED):
        super().__init__(message)


class InvalidCredentials(BudgetError):
    code = "INVALID_CREDENTIALS"
    http_status = 401

    def __init__(self, message: str = ERR_INVALID_CREDENTIALS):
        super().__init__(message)


class NotFound(BudgetError):
    """Requested entity does not exist."""

    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, resource_type: str):
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type


class Conflict(BudgetError):
    """Uniqueness or referential guard violation."""

    code = "CONFLICT"
    http_status = 409


class DuplicateUsername(Conflict):
    def __init__(self, message: str = "Username already exists"):
        super().__init__(message)


class StorageUnavailable(BudgetError):
    """Underlying storage could not be opened or queried."""

    code = "STORAGE_UNAVAILABLE"
    http_status = 500

    def __init__(self, message: str = ERR_DATABASE_OPERATION):
        super().__init__(message)


class Internal(BudgetError):
    """Unexpected extraction or decoding failure."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
