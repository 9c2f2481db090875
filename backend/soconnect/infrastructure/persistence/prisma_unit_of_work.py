"""
Prisma Unit of Work - repositories bound to one interactive transaction.

`prisma.tx()` commits when the block exits normally and rolls back on any
exception, CancelledError included.
"""

import logging
from datetime import timedelta

from prisma import Prisma

from soconnect.config.settings import Config
from soconnect.domain.ports.unit_of_work import UnitOfWork
from soconnect.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from soconnect.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)

logger = logging.getLogger(__name__)


class PrismaUnitOfWork(UnitOfWork):
    def __init__(self, prisma: Prisma):
        self._prisma = prisma
        self._tx = None

    async def __aenter__(self) -> "PrismaUnitOfWork":
        timeout = timedelta(seconds=Config.STORE_TIMEOUT_SECONDS)
        self._tx = self._prisma.tx(max_wait=timeout, timeout=timeout)
        client = await self._tx.__aenter__()
        self.users = PrismaUserRepository(client)
        self.messages = PrismaMessageRepository(client)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        tx, self._tx = self._tx, None
        await tx.__aexit__(exc_type, exc, tb)
        if exc_type is not None:
            logger.debug(f"[UnitOfWork] Transaction rolled back ({exc_type.__name__})")
