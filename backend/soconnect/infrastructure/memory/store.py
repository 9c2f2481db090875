"""Shared state behind the in-memory repositories."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from soconnect.domain.entities.message import Message
from soconnect.domain.entities.user import User
from soconnect.domain.value_objects.message_id import MessageId


@dataclass
class _Snapshot:
    users: dict
    messages: list
    last_id: int


@dataclass
class InMemoryStore:
    users: dict[str, User] = field(default_factory=dict)
    messages: list[Message] = field(default_factory=list)  # append order == id order
    last_id: int = 0
    last_timestamp: datetime = datetime.min.replace(tzinfo=timezone.utc)

    def next_id(self) -> MessageId:
        # Ids are never reused, not even after a rollback or deletion
        self.last_id += 1
        return MessageId(self.last_id)

    def now(self) -> datetime:
        """Server clock, never going backwards within this store."""
        now = datetime.now(timezone.utc)
        if now < self.last_timestamp:
            now = self.last_timestamp
        self.last_timestamp = now
        return now

    def snapshot(self) -> _Snapshot:
        return _Snapshot(dict(self.users), list(self.messages), self.last_id)

    def restore(self, snapshot: _Snapshot) -> None:
        self.users = snapshot.users
        self.messages = snapshot.messages
        # last_id is left as is so rolled-back ids are not handed out again
