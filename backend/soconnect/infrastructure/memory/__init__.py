"""
In-memory storage - STORAGE_BACKEND=memory / SESSION_BACKEND=memory.

Single process only, lost on restart. Used for development and tests.
"""

from soconnect.infrastructure.memory.store import InMemoryStore
from soconnect.infrastructure.memory.repositories import (
    InMemoryMessageRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from soconnect.infrastructure.memory.unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryMessageRepository",
    "InMemorySessionRepository",
    "InMemoryUnitOfWork",
]
