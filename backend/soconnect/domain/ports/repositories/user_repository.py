"""
User Repository Port - Interface for user persistence.
Implementations:
- soconnect/infrastructure/persistence/prisma_user_repository.py
- soconnect/infrastructure/memory/repositories.py
"""

from abc import ABC, abstractmethod
from typing import Optional
from soconnect.domain.entities.user import User
from soconnect.domain.value_objects.user_code import UserCode


class UserRepository(ABC):
    @abstractmethod
    async def get_by_code(self, code: UserCode) -> Optional[User]: ...

    @abstractmethod
    async def add(self, user: User) -> None:
        """Insert a new user. Raises CodeAlreadyRegisteredError on duplicates."""
        ...

    @abstractmethod
    async def delete(self, code: UserCode) -> bool: ...
