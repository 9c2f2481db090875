"""
Provider for the PostgreSQL backend through Prisma.

Imported lazily by create_container(); importing this module requires a
generated Prisma client.
"""

from typing import AsyncIterable

from dishka import Provider, Scope, provide
from prisma import Prisma

from soconnect.config.settings import Config
from soconnect.domain.ports.repositories import (
    MessageRepository,
    UserRepository,
)
from soconnect.domain.ports.unit_of_work import UnitOfWork
from soconnect.infrastructure.persistence import (
    PrismaMessageRepository,
    PrismaUnitOfWork,
    PrismaUserRepository,
)


class PrismaStorageProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        Connected on first use, disconnected when the container closes.
        """
        if Config.DATABASE_URL:
            prisma = Prisma(datasource={"url": Config.DATABASE_URL})
        else:
            prisma = Prisma()
        await prisma.connect()
        yield prisma
        await prisma.disconnect()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, prisma: Prisma) -> UnitOfWork:
        return PrismaUnitOfWork(prisma)
