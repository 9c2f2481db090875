"""
Sync ports.

MessageSource is what the engine reads from and appends through
(ChatApiClient in production, fakes in tests). ConversationView is whatever
renders one conversation; the engine only ever clears it or replaces its
whole content.
"""

from abc import ABC, abstractmethod
from typing import Optional

from soconnect.application.dto.message import MessageDTO


class MessageSource(ABC):
    @abstractmethod
    async def fetch_conversation(self, counterparty: str) -> list[MessageDTO]: ...

    @abstractmethod
    async def send_text(self, counterparty: str, text: str) -> MessageDTO: ...

    @abstractmethod
    async def send_attachment(
        self,
        counterparty: str,
        content: bytes,
        filename: str,
        mime_type: str,
        caption: Optional[str] = None,
    ) -> MessageDTO: ...


class ConversationView(ABC):
    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def replace(self, messages: list[MessageDTO]) -> None:
        """Discard everything rendered and render `messages` in order."""
        ...
