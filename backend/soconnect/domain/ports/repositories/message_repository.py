"""
Message Repository Port - the append-only message log.
Implementations:
- soconnect/infrastructure/persistence/prisma_message_repository.py
- soconnect/infrastructure/memory/repositories.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from soconnect.domain.entities.conversation import ConversationSummary
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.value_objects.conversation_key import ConversationKey
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.user_code import UserCode


class MessageRepository(ABC):
    @abstractmethod
    async def append(self, draft: MessageDraft) -> Message:
        """Store the draft, assigning the next id and the current timestamp."""
        ...

    @abstractmethod
    async def get_conversation(
        self,
        key: ConversationKey,
        limit: Optional[int] = None,
        before_id: Optional[MessageId] = None,
    ) -> list[Message]:
        """
        Messages between the two participants, in either direction.

        Ordered by ascending timestamp, ties broken by ascending id. With
        `limit`, only the newest `limit` messages (older than `before_id`
        when given) are returned, still in ascending order.
        """
        ...

    @abstractmethod
    async def summarize_conversations(
        self, user_code: UserCode
    ) -> list[ConversationSummary]:
        """Counterparties of `user_code`, most recently active first."""
        ...

    @abstractmethod
    async def delete_by_user(self, user_code: UserCode) -> int:
        """Hard-delete every message sent or received by the user."""
        ...
