"""
ConversationSummary Entity - one row of a user's conversation list.

Derived from the message log, never stored.
"""

from dataclasses import dataclass
from datetime import datetime

from soconnect.domain.value_objects.user_code import UserCode


@dataclass(frozen=True)
class ConversationSummary:
    counterparty: UserCode
    last_activity_at: datetime
