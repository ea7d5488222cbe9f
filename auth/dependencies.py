"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to protect endpoints.

Request gate:
    - No token              -> MissingToken (401)
    - Token fails verifying -> InvalidToken (403)
    - Token verifies        -> Identity handed to the route

The verifier lives on `app.state.token_verifier`, wired by `create_app`, so
each app instance (and each test) can carry its own secret.
"""

from typing import Optional

from fastapi import Header, Request

from .errors import MissingToken
from .tokens import Identity


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an `Authorization: <scheme> <token>` header value.

    Returns None when the header is absent or has no second part. The scheme
    word itself is not checked.
    """
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> Identity:
    """
    Dependency that retrieves and validates the current user.

    Returns:
        Identity: The verified (id, username) from the token.

    Raises:
        MissingToken: No usable Authorization header.
        InvalidToken: Signature, expiry or payload check failed.
    """
    token = extract_token(authorization)
    if token is None:
        raise MissingToken()
    return request.app.state.token_verifier.verify(token)
