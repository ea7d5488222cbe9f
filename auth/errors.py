"""
Error taxonomy for registration, login and the bearer-token gate.

Every error carries the HTTP status it maps to and a client-safe `detail`.
The app registers a single exception handler for `AuthError`, so routes and
dependencies just raise.

Notes:
    - `UserNotFound` and `InvalidPassword` share the same client detail on purpose;
      the distinction is kept for server-side logs only.
    - `InvalidToken` covers bad signature, expiry and malformed payloads alike.
    - `StorageUnavailable` should be raised `from` the driver error so the cause
      stays in the server traceback while the client sees a generic message.

LLM Prompt Example:
    "Show how to model an auth error taxonomy as exception classes that carry
    their HTTP status, and translate them with one FastAPI exception handler."
"""

from typing import Dict, Optional

__all__ = [
    "AuthError",
    "InvalidInput",
    "DuplicateUsername",
    "AuthenticationFailed",
    "UserNotFound",
    "InvalidPassword",
    "MissingToken",
    "InvalidToken",
    "StorageUnavailable",
]


class AuthError(Exception):
    """Base class; subclasses override `status_code` and `detail`."""

    status_code: int = 400
    detail: str = "Request failed"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidInput(AuthError):
    status_code = 400
    detail = "Username and password required"


class DuplicateUsername(AuthError):
    status_code = 409
    detail = "Username already exists"


class AuthenticationFailed(AuthError):
    """Login failed; the client is never told which check failed."""

    status_code = 400
    detail = "Invalid username or password"


class UserNotFound(AuthenticationFailed):
    pass


class InvalidPassword(AuthenticationFailed):
    pass


class MissingToken(AuthError):
    status_code = 401
    detail = "Missing token"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(AuthError):
    status_code = 403
    detail = "Invalid token"


class StorageUnavailable(AuthError):
    status_code = 500
    detail = "Internal server error"
