"""Custom exceptions for application-specific error handling."""

from __future__ import annotations

from typing import Optional, Dict, Any


class XcelerateException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class NotFoundError(XcelerateException):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "not_found", *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="NOT_FOUND", details=details, status_code=404)


# ===== AUTHENTICATION EXCEPTIONS =====


class AuthenticationException(XcelerateException):
    """Base exception for authentication errors."""


class SessionExpiredError(AuthenticationException):
    """Raised when there is no usable session; the client goes back to the login page."""

    def __init__(self, message: str = "session_expired", *, login_path: str = "/login"):
        super().__init__(
            message,
            error_code="SESSION_EXPIRED",
            details={"redirect_to": login_path},
            status_code=401,
        )


# ===== VALIDATION EXCEPTIONS =====


class ValidationException(XcelerateException):
    """Base exception for validation errors."""


class PasswordValidationError(ValidationException):
    """Raised when a new password fails the checks done before any remote call."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, error_code="INVALID_PASSWORD", details=details, status_code=422)


# ===== HOSTED SERVICE EXCEPTIONS =====


class PreferenceStoreError(XcelerateException):
    """Raised when the hosted auth/database service rejects or fails a call.

    ``message`` is the service's own error text so the client can show it verbatim.
    """

    def __init__(self, message: str, *, upstream_status: Optional[int] = None, operation: Optional[str] = None):
        details: Dict[str, Any] = {}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        if operation:
            details["operation"] = operation
        status_code = upstream_status if upstream_status in {401, 403, 404, 422} else 502
        super().__init__(message, error_code="PREFERENCE_STORE_ERROR", details=details, status_code=status_code)
