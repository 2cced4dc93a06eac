"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Record or collection not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Stale version token on a conditional write."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class StoreUnavailableError(AppError):
    """Transport, auth or configuration failure against the backing store."""

    def __init__(self, message: str = "Store unavailable", details: Any | None = None) -> None:
        super().__init__(code="store_unavailable", message=message, status_code=500, details=details)


class AuthError(AppError):
    """Wrong shared secret."""

    def __init__(self, message: str = "Invalid password", details: Any | None = None) -> None:
        super().__init__(code="unauthorized", message=message, status_code=401, details=details)
