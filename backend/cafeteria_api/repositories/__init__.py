"""
Persistence layer.

- PersistencePort: operations used by the services
- RemoteStore: SQLAlchemy relational store
- LocalStore: key-value session store
- FallbackStore: remote first, local on error
"""

from .base import PersistencePort, newest_first
from .fallback import FallbackStore
from .local import LocalStore
from .remote import RemoteStore

__all__ = [
    "PersistencePort",
    "newest_first",
    "RemoteStore",
    "LocalStore",
    "FallbackStore",
]
