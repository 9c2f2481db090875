"""
Prisma User Repository Implementation.

Prisma User Model (from schema.prisma, table "users"):
    model User {
        code       String   @id
        name       String
        passcode   String       # salted hash, never the raw passcode
        created_at DateTime @default(now())
    }

Mapping:
- Prisma: code (str) ←→ Domain: code (UserCode)
- Prisma: passcode ←→ Domain: passcode_hash
"""

import logging
from typing import Optional

from prisma import Prisma
from prisma.errors import UniqueViolationError
from prisma.models import User as PrismaUser

from soconnect.domain.entities.user import User
from soconnect.domain.exceptions import CodeAlreadyRegisteredError
from soconnect.domain.ports.repositories.user_repository import UserRepository
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.persistence.prisma_errors import PRISMA_TRANSIENT_ERRORS
from soconnect.infrastructure.resilience import guarded

logger = logging.getLogger(__name__)


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        """
        Args:
            prisma: Connected Prisma client, or the transaction client of a
                PrismaUnitOfWork
        """
        self._prisma = prisma

    def _to_entity(self, record: PrismaUser) -> User:
        return User(
            code=UserCode(record.code),
            name=record.name,
            passcode_hash=record.passcode,
            created_at=record.created_at,
        )

    async def get_by_code(self, code: UserCode) -> Optional[User]:
        record = await guarded(
            "users.find_unique",
            self._prisma.user.find_unique(where={"code": code.value}),
            transient=PRISMA_TRANSIENT_ERRORS,
        )
        return self._to_entity(record) if record else None

    async def add(self, user: User) -> None:
        try:
            await guarded(
                "users.create",
                self._prisma.user.create(
                    data={
                        "code": user.code.value,
                        "name": user.name,
                        "passcode": user.passcode_hash,
                        "created_at": user.created_at,
                    }
                ),
                transient=PRISMA_TRANSIENT_ERRORS,
            )
        except UniqueViolationError as e:
            raise CodeAlreadyRegisteredError(
                f"Code {user.code.value} is already registered"
            ) from e

    async def delete(self, code: UserCode) -> bool:
        count = await guarded(
            "users.delete_many",
            self._prisma.user.delete_many(where={"code": code.value}),
            transient=PRISMA_TRANSIENT_ERRORS,
        )
        return count > 0
