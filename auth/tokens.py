"""
Bearer token issuing and verification (JWT, HS256).

The signing secret is passed in at construction; nothing here reads global
state, so tests can run issuers and verifiers with distinct secrets side by
side. Tokens are stateless: the server keeps no session table and a token is
valid until its embedded `exp`.

Claims:
    sub       user id as a string (PyJWT requires a string subject)
    id        user id, original type
    username  username at issuance
    iat, exp  issuance / expiry, epoch seconds
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict
import logging
import time

import jwt

from .config import DEFAULT_TOKEN_TTL_SECONDS, REQUIRED_CLAIMS, TOKEN_ALGORITHM
from .errors import InvalidToken

log = logging.getLogger("loot.auth")


@dataclass(frozen=True)
class Identity:
    """Verified caller identity attached to admitted requests."""

    id: Any
    username: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username}


def _require_secret(secret: str) -> str:
    if not secret:
        raise ValueError("A non-empty signing secret is required")
    return secret


class TokenIssuer:
    """
    Mints signed, time-bounded tokens.

    Args:
        secret (str): HS256 signing key.
        ttl_seconds (int): Lifetime from issuance.
        clock (Callable[[], float]): Epoch-seconds source; injectable for tests.
    """

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        algorithm: str = TOKEN_ALGORITHM,
        clock: Callable[[], float] = time.time,
    ):
        self._secret = _require_secret(secret)
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: Any, username: str) -> str:
        now = int(self._clock())
        claims = {
            "sub": str(user_id),
            "id": user_id,
            "username": username,
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)


class TokenVerifier:
    """
    Checks signature, then expiry, and returns the embedded identity.

    Every failure (bad signature, expired, malformed, missing claims) raises
    the same `InvalidToken`. The underlying reason is only logged at DEBUG.
    The verifier holds no mutable state and is safe to share across threads.
    """

    def __init__(self, secret: str, algorithm: str = TOKEN_ALGORITHM, leeway: float = 0):
        self._secret = _require_secret(secret)
        self.algorithm = algorithm
        self.leeway = leeway

    def verify(self, token: str) -> Identity:
        if not token or not isinstance(token, str):
            raise InvalidToken()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.InvalidTokenError as exc:
            log.debug("Token rejected: %s", type(exc).__name__)
            raise InvalidToken() from exc

        username = payload["username"]
        if not isinstance(username, str) or not username:
            log.debug("Token rejected: bad username claim")
            raise InvalidToken()
        return Identity(id=payload["id"], username=username)
