"""
Session Repository Port - live session registry.
Implementations:
- soconnect/infrastructure/cache/redis_session_repository.py
- soconnect/infrastructure/memory/repositories.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from soconnect.domain.entities.session import Session
from soconnect.domain.value_objects.user_code import UserCode


class SessionRepository(ABC):
    @abstractmethod
    async def save(self, session: Session) -> None:
        """Store the session until its expiry."""
        ...

    @abstractmethod
    async def get_owner(self, session_id: str) -> Optional[UserCode]:
        """User code bound to a live session, None if unknown or expired."""
        ...

    @abstractmethod
    async def revoke(self, session_id: str) -> None: ...

    @abstractmethod
    async def revoke_user(self, user_code: UserCode) -> None:
        """Revoke every live session of the user."""
        ...
