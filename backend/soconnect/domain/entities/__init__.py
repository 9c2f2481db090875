"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from soconnect.domain.entities.user import User
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.entities.conversation import ConversationSummary
from soconnect.domain.entities.session import Session

__all__ = [
    "User",
    "Message",
    "MessageDraft",
    "ConversationSummary",
    "Session",
]
