"""In-process stand-ins for the sync engine's ports."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

from soconnect.application.dto.message import MessageDTO
from soconnect.application.sync.ports import ConversationView, MessageSource

ME = "11111"
T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeSource(MessageSource):
    def __init__(self):
        self.conversations: dict[str, list[MessageDTO]] = {}
        self.fetches = 0
        self.sent = []
        self.fetch_errors: list[Exception] = []  # raised one per fetch, in order
        self.send_error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None  # when set, fetches wait on it
        self._next_id = 0

    def add(self, counterparty, text, from_user=ME, at=None, id=None) -> MessageDTO:
        if id is None:
            self._next_id += 1
            id = self._next_id
        message = MessageDTO(
            id=id,
            from_user=from_user,
            to_user=counterparty if from_user == ME else ME,
            text=text,
            timestamp=at or T0 + timedelta(seconds=id),
        )
        self.conversations.setdefault(counterparty, []).append(message)
        return message

    async def fetch_conversation(self, counterparty):
        self.fetches += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fetch_errors:
            raise self.fetch_errors.pop(0)
        return list(self.conversations.get(counterparty, []))

    async def send_text(self, counterparty, text):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((counterparty, text))
        return self.add(counterparty, text)

    async def send_attachment(self, counterparty, content, filename, mime_type, caption=None):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((counterparty, filename, mime_type, caption))
        message = self.add(counterparty, caption)
        message = message.model_copy(
            update={
                "file_name": filename,
                "file_url": f"/uploads/{filename}",
                "file_type": mime_type,
                "file_size": len(content),
            }
        )
        self.conversations[counterparty][-1] = message
        return message


class RecordingView(ConversationView):
    def __init__(self):
        self.renders = 0
        self.clears = 0
        self.rendered: list[MessageDTO] = []

    def clear(self):
        self.clears += 1
        self.rendered = []

    def replace(self, messages):
        self.renders += 1
        self.rendered = list(messages)

    @property
    def texts(self):
        return [m.text for m in self.rendered]
