"""
Persistence Layer - PostgreSQL through Prisma.

Only imported when STORAGE_BACKEND=prisma, after `prisma generate` has
produced the client.
"""

from soconnect.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)
from soconnect.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from soconnect.infrastructure.persistence.prisma_unit_of_work import PrismaUnitOfWork

__all__ = [
    "PrismaUserRepository",
    "PrismaMessageRepository",
    "PrismaUnitOfWork",
]
