"""
Message Entity - A single message exchanged between two user codes.

The log assigns `id` and `timestamp`, so callers build a MessageDraft and the
repository returns the stored Message.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from soconnect.domain.exceptions.validation_error import (
    EmptyMessageError,
    SameParticipantError,
)
from soconnect.domain.value_objects.attachment import AttachmentDescriptor
from soconnect.domain.value_objects.conversation_key import ConversationKey
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.user_code import UserCode


def _normalize_text(text: Optional[str]) -> Optional[str]:
    if text is None or not text.strip():
        return None
    return text


@dataclass(frozen=True)
class MessageDraft:
    sender: UserCode
    recipient: UserCode
    text: Optional[str] = None
    attachment: Optional[AttachmentDescriptor] = None

    def __post_init__(self):
        if self.sender == self.recipient:
            raise SameParticipantError("Sender and recipient must be different")
        object.__setattr__(self, "text", _normalize_text(self.text))
        if self.text is None and self.attachment is None:
            raise EmptyMessageError()


@dataclass(frozen=True)
class Message:
    id: MessageId
    sender: UserCode
    recipient: UserCode
    timestamp: datetime
    text: Optional[str] = None
    attachment: Optional[AttachmentDescriptor] = None

    def __post_init__(self):
        if self.text is None and self.attachment is None:
            raise EmptyMessageError(f"Message {self.id} has neither text nor file")

    @classmethod
    def from_draft(
        cls, draft: MessageDraft, id: MessageId, timestamp: datetime
    ) -> Message:
        return cls(
            id=id,
            sender=draft.sender,
            recipient=draft.recipient,
            timestamp=timestamp,
            text=draft.text,
            attachment=draft.attachment,
        )

    @property
    def conversation_key(self) -> ConversationKey:
        return ConversationKey.between(self.sender, self.recipient)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Ascending timestamp, ties broken by ascending id."""
        return (self.timestamp, self.id.value)
