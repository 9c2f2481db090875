"""
Unit of Work Port - one all-or-nothing transaction over users and messages.

Usage:
    async with uow:
        await uow.messages.delete_by_user(code)
        await uow.users.delete(code)

Leaving the block normally commits. Leaving it with any exception,
cancellation included, rolls back.
"""

from abc import ABC, abstractmethod

from soconnect.domain.ports.repositories.message_repository import MessageRepository
from soconnect.domain.ports.repositories.user_repository import UserRepository


class UnitOfWork(ABC):
    users: UserRepository
    messages: MessageRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork": ...

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb) -> None: ...
