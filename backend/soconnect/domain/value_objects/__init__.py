"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
"""

from soconnect.domain.value_objects.user_code import UserCode
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.conversation_key import ConversationKey
from soconnect.domain.value_objects.attachment import AttachmentDescriptor

__all__ = [
    "UserCode",
    "MessageId",
    "ConversationKey",
    "AttachmentDescriptor",
]
