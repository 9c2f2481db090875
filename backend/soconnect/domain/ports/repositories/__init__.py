"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the application needs
- Does NOT specify implementation (Prisma, Redis, in-memory)
"""

from soconnect.domain.ports.repositories.user_repository import UserRepository
from soconnect.domain.ports.repositories.message_repository import MessageRepository
from soconnect.domain.ports.repositories.session_repository import SessionRepository

__all__ = [
    "UserRepository",
    "MessageRepository",
    "SessionRepository",
]
