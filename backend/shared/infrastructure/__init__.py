"""
Infrastructure module: Database sessions, local session store, request correlation.

Provides:
- Remote database engine and sessions (db.py)
- Local key-value snapshot store (session_store.py)
- Correlation IDs for request logging (correlation.py)
"""

from shared.infrastructure.db import (
    build_engine,
    get_engine,
    get_session_factory,
    get_db_context,
    safe_commit,
)
from shared.infrastructure.session_store import (
    SessionStore,
    MemorySessionStore,
    JsonFileSessionStore,
)

__all__ = [
    # db
    "build_engine",
    "get_engine",
    "get_session_factory",
    "get_db_context",
    "safe_commit",
    # session store
    "SessionStore",
    "MemorySessionStore",
    "JsonFileSessionStore",
]
