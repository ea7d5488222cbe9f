"""
Record types shared by the storage backends and the auth service.

Items stay plain dicts (`{"id", "name", "quantity", "price"}`), the same shape
the Postgres `dict_row` factory produces. Users get a small frozen dataclass
so the password hash can be kept out of `repr()` and out of API payloads.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class User:
    """
    Identity record owned by the credential store.

    Attributes:
        id: Store-assigned identifier (int for both built-in backends).
        username: Unique, case-sensitive, non-empty.
        password_hash: bcrypt hash; never the plaintext, never sent to clients.
    """

    id: Any
    username: str
    password_hash: str = field(repr=False)

    def to_public(self) -> Dict[str, Any]:
        """Client-safe view of the record (no hash)."""
        return {"id": self.id, "username": self.username}
