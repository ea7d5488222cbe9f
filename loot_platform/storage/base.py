"""
Base storage interface for Universal Loot.

Purpose:
    Define a small, stable contract that multiple storage backends
    (in-memory, Postgres) implement without requiring changes to the
    auth service or the routes. It covers two concerns:

    - Credential store: users keyed by a unique username.
    - Inventory: plain item rows.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.

LLM Prompt Example:
    "Show how a narrow, explicit storage interface enables dependency
    injection and easy backend swapping without touching service code."
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models import User


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    # ---- Credential store -------------------------------------------------

    @abstractmethod  # pragma: no cover
    def create_user(self, username: str, password_hash: str) -> User:
        """
        Persist a new user and return it with a freshly assigned id.

        Raises:
            DuplicateUsername: If the username is already taken. The check and
                the insert must be one atomic step so that concurrent creates of
                the same username produce exactly one winner.
            StorageUnavailable: If the backend cannot be reached.

        LLM Prompt Example:
            "Explain why uniqueness must be enforced by the store (UNIQUE
             constraint, ON CONFLICT) rather than by a read-then-write in the
             application."
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_user_by_username(self, username: str) -> Optional[User]:
        """Exact-match lookup; None if absent."""
        raise NotImplementedError

    # ---- Inventory --------------------------------------------------------

    @abstractmethod  # pragma: no cover
    def list_items(self) -> List[Dict[str, Any]]:
        """Return every item, ordered by id."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def create_item(self, name: str, quantity: int, price: float) -> Dict[str, Any]:
        """Insert an item and return the stored row."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def update_item(self, item_id: int, name: str, quantity: int, price: float) -> Optional[Dict[str, Any]]:
        """Replace an item's fields. Returns the updated row, or None if the id is unknown."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete_item(self, item_id: int) -> bool:
        """Delete an item. Returns False if the id is unknown."""
        raise NotImplementedError

    # ---- Lifecycle (optional) ---------------------------------------------

    def ensure_schema(self) -> None:
        """Create backing tables if needed. No-op for backends without a schema."""
        return None

    def close(self) -> None:
        """Release pooled resources. No-op by default."""
        return None
