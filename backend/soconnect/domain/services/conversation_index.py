"""
Conversation index derived from the raw message log.

Used by stores that cannot aggregate server-side (the in-memory store), and
as the reference behavior for the SQL aggregate in the Prisma repository.
"""

from typing import Iterable

from soconnect.domain.entities.conversation import ConversationSummary
from soconnect.domain.entities.message import Message
from soconnect.domain.value_objects.user_code import UserCode


def build_conversation_index(
    user_code: UserCode, messages: Iterable[Message]
) -> list[ConversationSummary]:
    """
    Group the user's messages by the other party and keep the latest timestamp.

    Returns summaries ordered by last activity, most recent first. Ties are
    ordered by counterparty code so the output is deterministic.
    """
    latest = {}
    for message in messages:
        if message.sender == user_code:
            other = message.recipient
        elif message.recipient == user_code:
            other = message.sender
        else:
            continue
        seen = latest.get(other)
        if seen is None or message.timestamp > seen:
            latest[other] = message.timestamp

    summaries = [
        ConversationSummary(counterparty=code, last_activity_at=ts)
        for code, ts in latest.items()
    ]
    summaries.sort(key=lambda s: s.counterparty.value)
    summaries.sort(key=lambda s: s.last_activity_at, reverse=True)
    return summaries


def order_conversation(messages: Iterable[Message]) -> list[Message]:
    """Ascending timestamp, ties broken by ascending id."""
    return sorted(messages, key=lambda m: m.sort_key)
