"""In-memory implementations of the repository ports."""

import logging
from datetime import datetime, timezone
from typing import Optional

from soconnect.domain.entities.conversation import ConversationSummary
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.entities.session import Session
from soconnect.domain.entities.user import User
from soconnect.domain.exceptions import CodeAlreadyRegisteredError
from soconnect.domain.ports.repositories import (
    MessageRepository,
    SessionRepository,
    UserRepository,
)
from soconnect.domain.services.conversation_index import (
    build_conversation_index,
    order_conversation,
)
from soconnect.domain.value_objects.conversation_key import ConversationKey
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.memory.store import InMemoryStore

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get_by_code(self, code: UserCode) -> Optional[User]:
        return self._store.users.get(code.value)

    async def add(self, user: User) -> None:
        if user.code.value in self._store.users:
            raise CodeAlreadyRegisteredError(
                f"Code {user.code.value} is already registered"
            )
        self._store.users[user.code.value] = user

    async def delete(self, code: UserCode) -> bool:
        return self._store.users.pop(code.value, None) is not None


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def append(self, draft: MessageDraft) -> Message:
        message = Message.from_draft(
            draft, id=self._store.next_id(), timestamp=self._store.now()
        )
        self._store.messages.append(message)
        return message

    async def get_conversation(
        self,
        key: ConversationKey,
        limit: Optional[int] = None,
        before_id: Optional[MessageId] = None,
    ) -> list[Message]:
        selected = [
            m
            for m in self._store.messages
            if m.conversation_key == key and (before_id is None or m.id < before_id)
        ]
        ordered = order_conversation(selected)
        if limit is not None:
            ordered = ordered[-limit:]
        return ordered

    async def summarize_conversations(
        self, user_code: UserCode
    ) -> list[ConversationSummary]:
        return build_conversation_index(user_code, self._store.messages)

    async def delete_by_user(self, user_code: UserCode) -> int:
        kept = [
            m
            for m in self._store.messages
            if m.sender != user_code and m.recipient != user_code
        ]
        removed = len(self._store.messages) - len(kept)
        self._store.messages = kept
        return removed


class InMemorySessionRepository(SessionRepository):
    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def _live(self, session_id: str) -> Optional[Session]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.expires_at <= datetime.now(timezone.utc):
            del self._sessions[session_id]
            return None
        return session

    async def save(self, session: Session) -> None:
        self._sessions[session.id] = session

    async def get_owner(self, session_id: str) -> Optional[UserCode]:
        session = self._live(session_id)
        return session.user_code if session else None

    async def revoke(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def revoke_user(self, user_code: UserCode) -> None:
        for sid in [s.id for s in self._sessions.values() if s.user_code == user_code]:
            del self._sessions[sid]
