"""
Delete User Command - administrative hard deletion.

The user's messages and the user row go in one transaction: commit only
after both deletes succeed, roll back on any error or cancellation. Session
revocation happens after the commit and is best effort.
"""

import logging
from dataclasses import dataclass

from soconnect.application.common.interfaces import Command, CommandHandler
from soconnect.domain.exceptions import EntityNotFoundError, TransientStoreError
from soconnect.domain.ports.repositories import SessionRepository
from soconnect.domain.ports.unit_of_work import UnitOfWork
from soconnect.domain.value_objects.user_code import UserCode

logger = logging.getLogger(__name__)


@dataclass
class DeleteUserResult:
    code: UserCode
    messages_deleted: int


@dataclass(frozen=True)
class DeleteUserCommand(Command[DeleteUserResult]):
    code: UserCode


class DeleteUserHandler(CommandHandler[DeleteUserResult]):
    def __init__(self, unit_of_work: UnitOfWork, session_repository: SessionRepository):
        self._uow = unit_of_work
        self._sessions = session_repository

    async def execute(self, command: DeleteUserCommand) -> DeleteUserResult:
        try:
            async with self._uow as uow:
                messages_deleted = await uow.messages.delete_by_user(command.code)
                if not await uow.users.delete(command.code):
                    raise EntityNotFoundError(f"User {command.code.value} not found")
        except BaseException as e:
            logger.warning(
                f"[Admin] Deletion of {command.code.value} rolled back: "
                f"{type(e).__name__}"
            )
            raise

        try:
            await self._sessions.revoke_user(command.code)
        except TransientStoreError as e:
            logger.warning(f"[Admin] Session revoke for {command.code.value} failed: {e}")

        logger.info(
            f"[Admin] Deleted user {command.code.value} "
            f"and {messages_deleted} message(s)"
        )
        return DeleteUserResult(code=command.code, messages_deleted=messages_deleted)
