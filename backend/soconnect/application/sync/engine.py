"""
SyncEngine - polling reconciliation for one conversation at a time per state.

State machine (per ConversationState):
    Idle --open_conversation(B)--> Tracking(B, known_ids=∅)
    Tracking --poll--> same ids: no-op | different ids: full reload
    Tracking --send--> append, reset known_ids, extra poll
    Tracking --close_conversation--> Idle

A poll response is applied only if the state's generation is unchanged
since the request started; open/close/send bump it, so a response for a
conversation that was closed or switched mid-flight is dropped.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from soconnect.application.dto.message import MessageDTO
from soconnect.application.sync.ports import MessageSource
from soconnect.application.sync.state import ConversationState
from soconnect.domain.exceptions import AuthError, TransientStoreError

logger = logging.getLogger(__name__)


class PollOutcome(str, Enum):
    IDLE = "idle"  # no conversation open
    UNCHANGED = "unchanged"  # same id set, view untouched
    RELOADED = "reloaded"  # view fully re-rendered
    DISCARDED = "discarded"  # state moved on while the fetch was in flight


def ordered(messages: list[MessageDTO]) -> list[MessageDTO]:
    return sorted(messages, key=lambda m: (m.timestamp, m.id))


class SyncEngine:
    def __init__(
        self,
        source: MessageSource,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        self._source = source
        self._on_session_expired = on_session_expired

    def open_conversation(self, state: ConversationState, counterparty: str) -> None:
        state.counterparty = counterparty
        state.known_ids = frozenset()
        state.generation += 1
        state.view.clear()
        logger.debug(f"[Sync] Opened conversation with {counterparty}")

    def close_conversation(self, state: ConversationState) -> None:
        if state.counterparty is not None:
            logger.debug(f"[Sync] Closed conversation with {state.counterparty}")
        state.counterparty = None
        state.known_ids = frozenset()
        state.generation += 1

    async def poll(self, state: ConversationState) -> PollOutcome:
        if not state.is_tracking:
            return PollOutcome.IDLE

        counterparty = state.counterparty
        generation = state.generation
        messages = await self._call(self._source.fetch_conversation(counterparty))

        if state.generation != generation or state.counterparty != counterparty:
            logger.debug(f"[Sync] Dropped stale poll result for {counterparty}")
            return PollOutcome.DISCARDED

        incoming = frozenset(m.id for m in messages)
        if incoming == state.known_ids:
            logger.debug(f"[Sync] No change in conversation with {counterparty}")
            return PollOutcome.UNCHANGED

        state.view.replace(ordered(messages))
        state.known_ids = incoming
        logger.debug(
            f"[Sync] Reloaded conversation with {counterparty} ({len(messages)} messages)"
        )
        return PollOutcome.RELOADED

    async def send_text(self, state: ConversationState, text: str) -> MessageDTO:
        counterparty = self._require_tracking(state)
        message = await self._call(self._source.send_text(counterparty, text))
        await self._after_send(state)
        return message

    async def send_attachment(
        self,
        state: ConversationState,
        content: bytes,
        filename: str,
        mime_type: str,
        caption: Optional[str] = None,
    ) -> MessageDTO:
        counterparty = self._require_tracking(state)
        message = await self._call(
            self._source.send_attachment(
                counterparty, content, filename, mime_type, caption
            )
        )
        await self._after_send(state)
        return message

    async def _after_send(self, state: ConversationState) -> None:
        # The sender must see their own message without waiting for a tick
        state.known_ids = frozenset()
        state.generation += 1
        try:
            await self.poll(state)
        except TransientStoreError as e:
            # The append went through; the next regular poll catches up
            logger.warning(f"[Sync] Refresh after send failed: {e}")

    async def _call(self, awaitable):
        try:
            return await awaitable
        except AuthError:
            logger.warning("[Sync] Session rejected by server, forcing logout")
            if self._on_session_expired is not None:
                self._on_session_expired()
            raise

    @staticmethod
    def _require_tracking(state: ConversationState) -> str:
        if not state.is_tracking:
            raise RuntimeError("No conversation is open")
        return state.counterparty
