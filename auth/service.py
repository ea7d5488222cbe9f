"""
Core authentication logic.

Registration: validate -> hash -> credential store.
Login: credential store lookup -> hash verify -> token issuer.

The service raises `auth.errors` exceptions and knows nothing about HTTP;
`main.create_app` translates them into responses.
"""

import logging
from typing import Optional

from loot_platform.models import User
from loot_platform.storage.base import BaseStorage

from .config import MAX_PASSWORD_BYTES, MAX_USERNAME_LENGTH
from .errors import InvalidInput, InvalidPassword, UserNotFound
from .tokens import TokenIssuer
from .utils import PasswordHasher

log = logging.getLogger("loot.auth")


class AuthService:
    """
    Coordinates the credential store, the password hasher and the token issuer.

    Args:
        storage (BaseStorage): Credential store.
        hasher (PasswordHasher): Salted password hasher.
        issuer (TokenIssuer): Token minting, already holding the signing secret.
    """

    def __init__(self, storage: BaseStorage, hasher: PasswordHasher, issuer: TokenIssuer):
        self.storage = storage
        self.hasher = hasher
        self.issuer = issuer
        # Verified against on unknown usernames so both login failures cost one bcrypt check.
        self._dummy_hash = hasher.hash("loot-timing-equaliser")

    @staticmethod
    def _check_text(username: Optional[str], password: Optional[str]) -> bytes:
        """Reject values no backend can store; return the encoded password."""
        if not username or not password:
            raise InvalidInput()
        try:
            username.encode("utf-8")
            raw_password = password.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidInput("Username and password must be valid UTF-8 text") from None
        if "\x00" in username or "\x00" in password:
            raise InvalidInput("Username and password must not contain NUL characters")
        return raw_password

    @classmethod
    def _validate_credentials(cls, username: Optional[str], password: Optional[str]) -> None:
        raw_password = cls._check_text(username, password)
        if len(username) > MAX_USERNAME_LENGTH:
            raise InvalidInput(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
        if len(raw_password) > MAX_PASSWORD_BYTES:
            raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    def register(self, username: Optional[str], password: Optional[str]) -> User:
        """
        Create a user with a freshly hashed password.

        Raises:
            InvalidInput: Missing/empty username or password, too long, unencodable
                or containing NUL.
            DuplicateUsername: Username already taken (decided by the store).
            StorageUnavailable: Backend failure.
        """
        self._validate_credentials(username, password)
        password_hash = self.hasher.hash(password)
        user = self.storage.create_user(username, password_hash)
        log.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def authenticate_user(self, username: Optional[str], password: Optional[str]) -> User:
        """
        Return the user whose stored hash matches `password`.

        Raises:
            InvalidInput: Missing username or password, or text no backend can store.
            UserNotFound: No such username.
            InvalidPassword: Hash mismatch.
        """
        self._check_text(username, password)

        user = self.storage.find_user_by_username(username)
        if user is None:
            self.hasher.verify(password, self._dummy_hash)
            log.warning("Login failed for %s: user not found", username)
            raise UserNotFound()

        if not self.hasher.verify(password, user.password_hash):
            log.warning("Login failed for %s: invalid password", username)
            raise InvalidPassword()

        return user

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        """Authenticate and return a signed bearer token."""
        user = self.authenticate_user(username, password)
        token = self.issuer.issue(user.id, user.username)
        log.info("Login: %s (id=%s)", user.username, user.id)
        return token
