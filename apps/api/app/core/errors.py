"""Domain error codes for the marketplace."""
from __future__ import annotations

import enum


class ErrorCode(str, enum.Enum):
    """Domain error codes."""

    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    COMPARE_FULL = "COMPARE_FULL"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AuthenticationRequiredError(DomainError):
    """Raised when an operation needs a signed-in viewer."""

    def __init__(self) -> None:
        super().__init__(ErrorCode.AUTHENTICATION_REQUIRED, "Sign in required")


class PermissionDeniedError(DomainError):
    """Raised when the viewer may not perform an operation."""

    def __init__(self, action: str) -> None:
        super().__init__(ErrorCode.PERMISSION_DENIED, f"Not allowed to {action}")
        self.action = action


class InvalidTransitionError(DomainError):
    """Raised when a lifecycle action does not apply to the current status."""

    def __init__(self, current: str | None, action: str) -> None:
        origin = current or "new"
        super().__init__(ErrorCode.INVALID_TRANSITION, f"Cannot {action} a {origin} listing")
        self.current = current
        self.action = action


class CompareFullError(DomainError):
    """Raised at the API edge when the compare selection is at capacity."""

    def __init__(self, capacity: int) -> None:
        super().__init__(ErrorCode.COMPARE_FULL, f"You can compare up to {capacity} vehicles")
        self.capacity = capacity


class StoreWriteError(DomainError):
    """Raised when the backing store rejects a mutation."""

    def __init__(self, action: str) -> None:
        super().__init__(ErrorCode.STORE_WRITE_FAILED, f"{action} failed")
        self.action = action
