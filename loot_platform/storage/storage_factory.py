"""
Storage factory – switch storage backend from config (lazy env version)
======================================================================

This module centralizes selection of the storage backend (in-memory vs DB)
so the rest of the app can stay ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- LOOT_STORAGE_BACKEND: "memory" (default) or "postgres"
- LOOT_DB_DSN:          DSN string if backend=="postgres". May be empty when the
                        standard PG* libpq variables describe the database.
- LOOT_DB_POOL_MIN / LOOT_DB_POOL_MAX: pool bounds for postgres

LLM Prompt
----------
You are extending storage backends. Keep defaults safe ("memory"). Read env lazily
inside the factory function. Don't import heavy DB modules unless needed.
"""

from typing import Optional
import logging
import os

# In-memory storage always available/lightweight
from loot_platform.storage.storage import Storage

log = logging.getLogger("loot.storage")

_LIBPQ_ENV = ("PGHOST", "PGDATABASE", "PGUSER", "PGSERVICE")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def get_storage(backend: Optional[str] = None, **kwargs):
    """
    Return a Storage-like object based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads LOOT_STORAGE_BACKEND.
    kwargs : dict
        Extra args passed to the backend constructor. For postgres: dsn, min_size,
        max_size, timeout.

    Returns
    -------
    BaseStorage-compatible instance

    Raises
    ------
    ValueError
        Unknown backend, or postgres selected with no way to locate the database.
    """
    be = (backend or os.getenv("LOOT_STORAGE_BACKEND", "memory")).strip().lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    if be == "postgres":
        dsn = kwargs.pop("dsn", None) or os.getenv("LOOT_DB_DSN", "")
        if not dsn and not any(os.getenv(v) for v in _LIBPQ_ENV):
            raise ValueError("DB DSN is required for postgres backend (env LOOT_DB_DSN or PGHOST/PGDATABASE)")
        kwargs.setdefault("min_size", max(1, _env_int("LOOT_DB_POOL_MIN", 1)))
        kwargs.setdefault("max_size", max(kwargs["min_size"], _env_int("LOOT_DB_POOL_MAX", 10)))
        # Local import to avoid hard dependency when not using postgres
        from loot_platform.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn, **kwargs)

    raise ValueError(f"Unknown storage backend: {be!r}")
