"""
ConversationPoller - one cancellable repeating poll task per conversation.

Cancellation is synchronous: `unwatch` cancels the task and closes the
conversation before returning, so whatever response is still in flight
is never applied.
"""

import asyncio
import logging

from soconnect.application.sync.engine import PollOutcome, SyncEngine
from soconnect.application.sync.state import ConversationState
from soconnect.domain.exceptions import AuthError, TransientStoreError

logger = logging.getLogger(__name__)


class ConversationPoller:
    def __init__(self, engine: SyncEngine, interval: float):
        if interval < 0:
            raise ValueError("Poll interval cannot be negative")
        self._engine = engine
        self._interval = interval
        self._tasks: dict[str, tuple[ConversationState, asyncio.Task]] = {}

    @property
    def watching(self) -> list[str]:
        return [key for key, (_, task) in self._tasks.items() if not task.done()]

    def watch(self, state: ConversationState, counterparty: str) -> asyncio.Task:
        """Open the conversation on `state` and start polling it. Needs a running loop."""
        self.unwatch(counterparty)
        self._engine.open_conversation(state, counterparty)
        task = asyncio.get_running_loop().create_task(
            self._run(state, counterparty), name=f"poll:{counterparty}"
        )
        self._tasks[counterparty] = (state, task)
        return task

    def unwatch(self, counterparty: str) -> None:
        entry = self._tasks.pop(counterparty, None)
        if entry is None:
            return
        state, task = entry
        task.cancel()
        if state.counterparty == counterparty:
            self._engine.close_conversation(state)

    def stop_all(self) -> None:
        for counterparty in list(self._tasks):
            self.unwatch(counterparty)

    async def _run(self, state: ConversationState, counterparty: str) -> None:
        while state.counterparty == counterparty:
            try:
                outcome = await self._engine.poll(state)
            except AuthError:
                logger.warning(f"[Sync] Stopped polling {counterparty}: session expired")
                return
            except TransientStoreError as e:
                logger.warning(f"[Sync] Poll of {counterparty} failed, will retry: {e}")
            except Exception:
                logger.exception(f"[Sync] Unexpected error polling {counterparty}, will retry")
            else:
                if outcome is PollOutcome.IDLE:
                    return
            await asyncio.sleep(self._interval)
