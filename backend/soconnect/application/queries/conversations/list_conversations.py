"""List Conversations Query - the conversation index for one user."""

from dataclasses import dataclass

from soconnect.application.common.interfaces import Query, QueryHandler
from soconnect.application.common.retry import read_retry
from soconnect.domain.entities.conversation import ConversationSummary
from soconnect.domain.ports.repositories import MessageRepository
from soconnect.domain.value_objects.user_code import UserCode


@dataclass(frozen=True)
class ListConversationsQuery(Query[list[ConversationSummary]]):
    user_code: UserCode


class ListConversationsHandler(QueryHandler[list[ConversationSummary]]):
    def __init__(self, message_repository: MessageRepository):
        self._messages = message_repository

    @read_retry
    async def execute(self, query: ListConversationsQuery) -> list[ConversationSummary]:
        # Recomputed from the log on every call; zero messages gives []
        return await self._messages.summarize_conversations(query.user_code)
