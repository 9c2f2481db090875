"""
UploadAttachment Command - store a file and log a message pointing at it.

Flow:
1. Validate MIME type (allow-list) and size (ceiling) before touching storage
2. Store bytes through the object store, get a retrieval path
3. Append a message carrying the attachment descriptor (+ optional caption)

Steps 2 and 3 are not atomic. If the append fails after the bytes were
stored, the object is orphaned: it is logged at error level and left in
place, no reconciliation is attempted.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from soconnect.application.common.interfaces import Command, CommandHandler
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.exceptions import (
    AttachmentTooLargeError,
    EmptyMessageError,
    EntityNotFoundError,
    SameParticipantError,
    UnsupportedTypeError,
)
from soconnect.domain.ports.object_store import ObjectStore
from soconnect.domain.ports.repositories import MessageRepository, UserRepository
from soconnect.domain.value_objects.attachment import AttachmentDescriptor
from soconnect.domain.value_objects.user_code import UserCode

logger = logging.getLogger(__name__)


def normalize_mime_type(mime_type: Optional[str]) -> str:
    """'Text/Plain; charset=utf-8' -> 'text/plain'"""
    return (mime_type or "").split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class UploadAttachmentCommand(Command[Message]):
    sender: UserCode
    recipient: UserCode
    content: bytes
    filename: str
    mime_type: str
    caption: Optional[str] = None


class UploadAttachmentHandler(CommandHandler[Message]):
    def __init__(
        self,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        object_store: ObjectStore,
        allowed_types: Iterable[str],
        max_bytes: int,
    ):
        self._messages = message_repository
        self._users = user_repository
        self._store = object_store
        self._allowed_types = {normalize_mime_type(t) for t in allowed_types}
        self._max_bytes = max_bytes

    def validate(self, mime_type: str, size: int) -> str:
        """Raise before any storage write when the file is not acceptable."""
        # Size wins over type when both are wrong
        if size > self._max_bytes:
            raise AttachmentTooLargeError(
                f"File is {size} bytes, the limit is {self._max_bytes} bytes"
            )
        mime = normalize_mime_type(mime_type)
        if mime not in self._allowed_types:
            raise UnsupportedTypeError(f"File type '{mime or 'unknown'}' is not allowed")
        if size == 0:
            raise EmptyMessageError("Attachment is empty")
        return mime

    async def execute(self, command: UploadAttachmentCommand) -> Message:
        if command.sender == command.recipient:
            raise SameParticipantError("Sender and recipient must be different")
        mime = self.validate(command.mime_type, len(command.content))
        filename = (command.filename or "").strip() or "unnamed_file"

        if await self._users.get_by_code(command.recipient) is None:
            raise EntityNotFoundError(f"User {command.recipient.value} not found")

        file_url = await self._store.put(command.content, filename, mime)
        logger.info(
            f"[Attachments] Stored {filename} ({len(command.content)} bytes) at {file_url}"
        )

        draft = MessageDraft(
            sender=command.sender,
            recipient=command.recipient,
            text=command.caption,
            attachment=AttachmentDescriptor(
                file_name=filename,
                file_url=file_url,
                file_type=mime,
                file_size=len(command.content),
            ),
        )
        try:
            message = await self._messages.append(draft)
        except Exception as e:
            logger.error(
                f"[Attachments] Orphaned stored object {file_url}: "
                f"message append failed ({type(e).__name__}: {e})"
            )
            raise

        logger.info(
            f"[MessageLog] Appended attachment message {message.id.value} "
            f"{message.sender.value} -> {message.recipient.value}"
        )
        return message
