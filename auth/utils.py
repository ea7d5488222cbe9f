"""
Password hashing for the auth module.

bcrypt gives us a random per-call salt (embedded in the hash string) and a
tunable cost factor, so two hashes of the same password differ while both
still verify.
"""

import bcrypt

from .config import DEFAULT_BCRYPT_ROUNDS, MAX_PASSWORD_BYTES


class PasswordHasher:
    """
    Salted, cost-tunable password hasher.

    Args:
        rounds (int): bcrypt log2 work factor (4..31). Tests use 4 for speed.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Return a bcrypt hash string (`$2b$<rounds>$<salt><digest>`)."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Constant-time check of `password` against a stored hash.

        Never raises: a mismatch, an over-long or unencodable password, or a
        malformed / corrupted hash all return False.
        """
        if not password_hash:
            return False
        try:
            raw = password.encode("utf-8")
            if len(raw) > MAX_PASSWORD_BYTES:
                return False
            return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # UnicodeEncodeError (lone surrogates) is a ValueError
            return False
