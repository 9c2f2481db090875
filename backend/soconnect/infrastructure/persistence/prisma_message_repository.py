"""
Prisma Message Repository Implementation.

Prisma Message Model (from schema.prisma, table "messages"):
    model Message {
        id        Int      @id @default(autoincrement())
        from_user String
        to_user   String
        text      String?
        file_name String?
        file_url  String?
        file_type String?
        file_size Int?
        timestamp DateTime @default(now())
        @@index([from_user, to_user, timestamp])
    }

Mapping:
- Prisma: id (int) ←→ Domain: id (MessageId)
- Prisma: from_user / to_user ←→ Domain: sender / recipient (UserCode)
- Prisma: file_* columns ←→ Domain: attachment (AttachmentDescriptor or None)

The id and the timestamp are assigned by the database on insert.
"""

import logging
from datetime import datetime
from typing import Optional

from prisma import Prisma
from prisma.models import Message as PrismaMessage

from soconnect.domain.entities.conversation import ConversationSummary
from soconnect.domain.entities.message import Message, MessageDraft
from soconnect.domain.ports.repositories.message_repository import MessageRepository
from soconnect.domain.value_objects.attachment import AttachmentDescriptor
from soconnect.domain.value_objects.conversation_key import ConversationKey
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.persistence.prisma_errors import PRISMA_TRANSIENT_ERRORS
from soconnect.infrastructure.resilience import guarded

logger = logging.getLogger(__name__)

# Counterparties of $1 with the latest timestamp in either direction.
# Tie on timestamp is broken by counterparty code.
CONVERSATION_INDEX_SQL = """
SELECT counterparty, MAX(ts) AS last_activity_at
FROM (
    SELECT to_user AS counterparty, "timestamp" AS ts
    FROM messages WHERE from_user = $1
    UNION ALL
    SELECT from_user AS counterparty, "timestamp" AS ts
    FROM messages WHERE to_user = $1
) AS pairs
GROUP BY counterparty
ORDER BY last_activity_at DESC, counterparty ASC
"""


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


class PrismaMessageRepository(MessageRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        attachment = None
        if record.file_url:
            attachment = AttachmentDescriptor(
                file_name=record.file_name,
                file_url=record.file_url,
                file_type=record.file_type,
                file_size=record.file_size or 0,
            )
        return Message(
            id=MessageId(record.id),
            sender=UserCode(record.from_user),
            recipient=UserCode(record.to_user),
            timestamp=record.timestamp,
            text=record.text,
            attachment=attachment,
        )

    async def append(self, draft: MessageDraft) -> Message:
        data = {
            "from_user": draft.sender.value,
            "to_user": draft.recipient.value,
            "text": draft.text,
        }
        if draft.attachment is not None:
            data.update(
                file_name=draft.attachment.file_name,
                file_url=draft.attachment.file_url,
                file_type=draft.attachment.file_type,
                file_size=draft.attachment.file_size,
            )
        record = await guarded(
            "messages.create",
            self._prisma.message.create(data=data),
            transient=PRISMA_TRANSIENT_ERRORS,
        )
        return self._to_entity(record)

    async def get_conversation(
        self,
        key: ConversationKey,
        limit: Optional[int] = None,
        before_id: Optional[MessageId] = None,
    ) -> list[Message]:
        where = {
            "OR": [
                {"from_user": key.low.value, "to_user": key.high.value},
                {"from_user": key.high.value, "to_user": key.low.value},
            ]
        }
        if before_id is not None:
            where["id"] = {"lt": before_id.value}

        if limit is None:
            records = await guarded(
                "messages.find_many",
                self._prisma.message.find_many(
                    where=where, order=[{"timestamp": "asc"}, {"id": "asc"}]
                ),
                transient=PRISMA_TRANSIENT_ERRORS,
            )
        else:
            records = await guarded(
                "messages.find_many",
                self._prisma.message.find_many(
                    where=where,
                    order=[{"timestamp": "desc"}, {"id": "desc"}],
                    take=limit,
                ),
                transient=PRISMA_TRANSIENT_ERRORS,
            )
            records.reverse()  # Now oldest first
        return [self._to_entity(record) for record in records]

    async def summarize_conversations(
        self, user_code: UserCode
    ) -> list[ConversationSummary]:
        rows = await guarded(
            "messages.conversation_index",
            self._prisma.query_raw(CONVERSATION_INDEX_SQL, user_code.value),
            transient=PRISMA_TRANSIENT_ERRORS,
        )
        return [
            ConversationSummary(
                counterparty=UserCode(row["counterparty"]),
                last_activity_at=_parse_timestamp(row["last_activity_at"]),
            )
            for row in rows
        ]

    async def delete_by_user(self, user_code: UserCode) -> int:
        return await guarded(
            "messages.delete_many",
            self._prisma.message.delete_many(
                where={
                    "OR": [
                        {"from_user": user_code.value},
                        {"to_user": user_code.value},
                    ]
                }
            ),
            transient=PRISMA_TRANSIENT_ERRORS,
        )
