"""
Error Taxonomy.

Every failure that crosses a service or store boundary is one of:

- ``BackendUnavailableError``: Supabase is not configured or the client
  could not be created (offline mode).
- ``DataValidationError``: caller-supplied data failed a precondition.
- ``BackendOperationError``: the remote call itself was rejected
  (network, permission, not-found).  ``AuthenticationError`` is the
  identity-provider flavour and carries an ``AuthErrorCode``.

Local-storage failures never escape ``LocalStorageService``; they are
logged and reported as absence.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

class AuthErrorCode(StrEnum):
    """Categories of identity-provider failures surfaced to the UI."""

    INVALID_CREDENTIALS = "invalid_credentials"
    USER_BANNED = "user_banned"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    WEAK_PASSWORD = "weak_password"
    NETWORK_ERROR = "network_error"
    VALIDATION_ERROR = "validation_error"
    UNKNOWN_ERROR = "unknown_error"


SUPABASE_ERROR_MAP: dict[str, tuple[AuthErrorCode, str]] = {
    "invalid_credentials": (
        AuthErrorCode.INVALID_CREDENTIALS,
        "Incorrect email or password.",
    ),
    "invalid login credentials": (
        AuthErrorCode.INVALID_CREDENTIALS,
        "Incorrect email or password.",
    ),
    "invalid_grant": (
        AuthErrorCode.INVALID_CREDENTIALS,
        "Incorrect email or password.",
    ),
    "email_not_confirmed": (
        AuthErrorCode.EMAIL_NOT_CONFIRMED,
        "Please confirm your email address before signing in.",
    ),
    "user_banned": (
        AuthErrorCode.USER_BANNED,
        "This account has been disabled.",
    ),
    "user_already_exists": (
        AuthErrorCode.EMAIL_ALREADY_EXISTS,
        "An account with this email already exists. Try signing in.",
    ),
    "weak_password": (
        AuthErrorCode.WEAK_PASSWORD,
        "The password does not meet the strength requirements.",
    ),
}


def classify_auth_error(exc: Exception) -> tuple[AuthErrorCode, str]:
    """Map a Supabase or network exception to an error code and message."""
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return (
            AuthErrorCode.NETWORK_ERROR,
            "Cannot reach the server. Check your internet connection.",
        )

    error_str = f"{getattr(exc, 'code', '') or ''} {exc}".lower()
    for code_key, (error_code, human_message) in SUPABASE_ERROR_MAP.items():
        if code_key in error_str:
            return error_code, human_message

    return (
        AuthErrorCode.UNKNOWN_ERROR,
        "An unexpected error occurred. Please try again later.",
    )


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class MyMoneyError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        self.message: str = message
        self.original_error: Optional[Exception] = original_error
        super().__init__(self.message)


class BackendUnavailableError(MyMoneyError, RuntimeError):
    """Raised when the backend client was never initialised."""


class DataValidationError(MyMoneyError, ValueError):
    """Raised when caller-supplied data fails validation."""


class BackendOperationError(MyMoneyError):
    """Raised when a Supabase call fails."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        operation: str = "",
        table: str = "",
    ) -> None:
        super().__init__(message, original_error)
        self.operation: str = operation
        self.table: str = table


class AuthenticationError(BackendOperationError):
    """Raised when the identity provider rejects a sign-in or sign-up."""

    def __init__(
        self,
        message: str,
        error_code: AuthErrorCode = AuthErrorCode.UNKNOWN_ERROR,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, original_error, operation="auth", table="")
        self.error_code: AuthErrorCode = error_code
