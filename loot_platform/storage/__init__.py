"""
Storage backends for Universal Loot.

`get_storage()` picks one from the environment; see `storage_factory`.
"""

from .base import BaseStorage
from .storage import Storage
from .storage_factory import get_storage

__all__ = ["BaseStorage", "Storage", "get_storage"]
