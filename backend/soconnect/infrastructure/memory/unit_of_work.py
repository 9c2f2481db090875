"""Snapshot-based unit of work over the in-memory store."""

from typing import Optional

from soconnect.domain.ports.repositories import MessageRepository, UserRepository
from soconnect.domain.ports.unit_of_work import UnitOfWork
from soconnect.infrastructure.memory.repositories import (
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from soconnect.infrastructure.memory.store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(
        self,
        store: InMemoryStore,
        users: Optional[UserRepository] = None,
        messages: Optional[MessageRepository] = None,
    ):
        self._store = store
        self.users = users or InMemoryUserRepository(store)
        self.messages = messages or InMemoryMessageRepository(store)
        self._snapshot = None

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        self._snapshot = self._store.snapshot()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self._store.restore(self._snapshot)
        self._snapshot = None
