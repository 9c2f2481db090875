"""Message DTOs for API request/response."""

from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from soconnect.domain.entities.message import Message


class MessageDTO(BaseModel):
    """Row of the `messages` table as seen by clients."""

    id: int
    from_user: str
    to_user: str
    text: Optional[str] = None
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    timestamp: datetime

    @classmethod
    def from_entity(cls, message: Message) -> MessageDTO:
        attachment = message.attachment
        return cls(
            id=message.id.value,
            from_user=message.sender.value,
            to_user=message.recipient.value,
            text=message.text,
            file_name=attachment.file_name if attachment else None,
            file_url=attachment.file_url if attachment else None,
            file_type=attachment.file_type if attachment else None,
            file_size=attachment.file_size if attachment else None,
            timestamp=message.timestamp,
        )
