"""
DTOs - Data Transfer Objects

- message.py      → MessageDTO
- conversation.py → ConversationSummaryDTO
- auth.py         → UserDTO, LoginResultDTO

DTOs are for API input/output and for the sync engine; entities are for
business logic.
"""

from soconnect.application.dto.message import MessageDTO
from soconnect.application.dto.conversation import ConversationSummaryDTO
from soconnect.application.dto.auth import UserDTO, LoginResultDTO

__all__ = [
    "MessageDTO",
    "ConversationSummaryDTO",
    "UserDTO",
    "LoginResultDTO",
]
