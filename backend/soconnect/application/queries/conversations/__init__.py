"""Conversation-related queries."""

from soconnect.application.queries.conversations.list_conversations import (
    ListConversationsQuery,
    ListConversationsHandler,
)
from soconnect.application.queries.conversations.get_conversation import (
    GetConversationQuery,
    GetConversationHandler,
)

__all__ = [
    "ListConversationsQuery",
    "ListConversationsHandler",
    "GetConversationQuery",
    "GetConversationHandler",
]
