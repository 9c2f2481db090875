"""Conversation DTOs for API request/response."""

from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from soconnect.domain.entities.conversation import ConversationSummary


class ConversationSummaryDTO(BaseModel):
    counterparty_code: str
    last_activity_at: datetime

    @classmethod
    def from_entity(cls, summary: ConversationSummary) -> ConversationSummaryDTO:
        return cls(
            counterparty_code=summary.counterparty.value,
            last_activity_at=summary.last_activity_at,
        )
