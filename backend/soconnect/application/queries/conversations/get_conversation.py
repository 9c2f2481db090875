"""
GetConversation Query - full history between the caller and one counterparty.

Symmetric: (A, B) and (B, A) read the same conversation key. Optional
`limit` + `before_id` page backwards from the newest message; without them
the whole conversation is returned.
"""

from dataclasses import dataclass
from typing import Optional

from soconnect.application.common.interfaces import Query, QueryHandler
from soconnect.application.common.retry import read_retry
from soconnect.domain.entities.message import Message
from soconnect.domain.exceptions import DomainValidationError
from soconnect.domain.ports.repositories import MessageRepository
from soconnect.domain.value_objects.conversation_key import ConversationKey
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.user_code import UserCode


@dataclass(frozen=True)
class GetConversationQuery(Query[list[Message]]):
    user_code: UserCode
    counterparty: UserCode
    limit: Optional[int] = None
    before_id: Optional[MessageId] = None


class GetConversationHandler(QueryHandler[list[Message]]):
    def __init__(self, message_repository: MessageRepository):
        self._messages = message_repository

    @read_retry
    async def execute(self, query: GetConversationQuery) -> list[Message]:
        if query.limit is not None and query.limit < 1:
            raise DomainValidationError("limit must be a positive integer")
        key = ConversationKey.between(query.user_code, query.counterparty)
        return await self._messages.get_conversation(
            key, limit=query.limit, before_id=query.before_id
        )
