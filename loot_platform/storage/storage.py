"""
Storage module for Universal Loot (in-memory implementation).

Responsibilities:
    - Store users keyed by unique username, with sequential ids
    - Store inventory items with sequential ids
    - Enforce username uniqueness atomically

Design:
    - This is an in-memory reference implementation that satisfies the BaseStorage contract.
    - It is intentionally simple to keep unit/integration tests fast and deterministic.
    - A single lock makes each check-and-insert one atomic step, which is this
      backend's equivalent of the UNIQUE(username) constraint in Postgres.
    - For production, use the Postgres backend (`db_storage.py`).

LLM Prompt Example:
    "Explain how this in-memory storage can be swapped for a database-backed layer
     without changing the auth service or API code, by adhering to a
     narrow, explicit BaseStorage interface."
"""

import itertools
import threading
from typing import Any, Dict, List, Optional

from auth.errors import DuplicateUsername

from ..models import User
from .base import BaseStorage


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty user and item tables.

        Internal schema:
            self.users = { username: User(id, username, password_hash) }
            self.items = { item_id: {"id": int, "name": str, "quantity": int, "price": float} }
        """
        self.users: Dict[str, User] = {}
        self.items: Dict[int, Dict[str, Any]] = {}
        self._user_ids = itertools.count(1)
        self._item_ids = itertools.count(1)
        self._lock = threading.Lock()

    # ---- Credential store -------------------------------------------------

    def create_user(self, username: str, password_hash: str) -> User:
        """
        Insert a user unless the username is taken.

        Raises:
            DuplicateUsername: If another record already owns `username`.

        LLM Prompt Example:
            "Demonstrate how a lock-guarded check-and-insert gives exactly one
             winner when many threads register the same username at once."
        """
        with self._lock:
            if username in self.users:
                raise DuplicateUsername()
            user = User(id=next(self._user_ids), username=username, password_hash=password_hash)
            self.users[username] = user
            return user

    def find_user_by_username(self, username: str) -> Optional[User]:
        return self.users.get(username)

    # ---- Inventory --------------------------------------------------------

    def list_items(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(self.items[k]) for k in sorted(self.items)]

    def create_item(self, name: str, quantity: int, price: float) -> Dict[str, Any]:
        with self._lock:
            item_id = next(self._item_ids)
            item = {"id": item_id, "name": name, "quantity": quantity, "price": price}
            self.items[item_id] = item
            return dict(item)

    def update_item(self, item_id: int, name: str, quantity: int, price: float) -> Optional[Dict[str, Any]]:
        with self._lock:
            if item_id not in self.items:
                return None
            item = {"id": item_id, "name": name, "quantity": quantity, "price": price}
            self.items[item_id] = item
            return dict(item)

    def delete_item(self, item_id: int) -> bool:
        with self._lock:
            return self.items.pop(item_id, None) is not None
