"""Register User Command."""

import logging
from dataclasses import dataclass

from soconnect.application.common.interfaces import Command, CommandHandler
from soconnect.domain.entities.user import User
from soconnect.domain.exceptions import (
    CodeAlreadyRegisteredError,
    DomainValidationError,
)
from soconnect.domain.ports.repositories import UserRepository
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.security import PasscodeHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisterUserCommand(Command[User]):
    name: str
    code: UserCode
    passcode: str


class RegisterUserHandler(CommandHandler[User]):
    def __init__(self, user_repository: UserRepository, hasher: PasscodeHasher):
        self._users = user_repository
        self._hasher = hasher

    async def execute(self, command: RegisterUserCommand) -> User:
        if not command.name or not command.name.strip():
            raise DomainValidationError("Name cannot be empty")
        if not command.passcode:
            raise DomainValidationError("Passcode cannot be empty")

        # Cheap early check; the store's primary key still decides races
        if await self._users.get_by_code(command.code):
            raise CodeAlreadyRegisteredError(
                f"Code {command.code.value} is already registered"
            )

        user = User.create(
            code=command.code,
            name=command.name,
            passcode_hash=self._hasher.hash(command.passcode),
        )
        await self._users.add(user)
        logger.info(f"[Auth] Registered user {user.code.value}")
        return user
