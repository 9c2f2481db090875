"""
SendMessage Command - append a text message to the log.

The sender always comes from the authorized session, never from the request
body. Not retried on TransientStoreError: without an idempotency key a retry
could store the message twice.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from soconnect.application.common.interfaces import Command, CommandHandler
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.exceptions import EntityNotFoundError
from soconnect.domain.ports.repositories import MessageRepository, UserRepository
from soconnect.domain.value_objects.user_code import UserCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendMessageCommand(Command[Message]):
    sender: UserCode
    recipient: UserCode
    text: Optional[str]


class SendMessageHandler(CommandHandler[Message]):
    def __init__(
        self,
        message_repository: MessageRepository,
        user_repository: UserRepository,
    ):
        self._messages = message_repository
        self._users = user_repository

    async def execute(self, command: SendMessageCommand) -> Message:
        draft = MessageDraft(
            sender=command.sender,
            recipient=command.recipient,
            text=command.text,
        )
        if await self._users.get_by_code(command.recipient) is None:
            raise EntityNotFoundError(f"User {command.recipient.value} not found")

        message = await self._messages.append(draft)
        logger.info(
            f"[MessageLog] Appended message {message.id.value} "
            f"{message.sender.value} -> {message.recipient.value}"
        )
        return message
