"""
ConversationState - everything the engine knows about one chat window.

Passed into every SyncEngine call. Nothing is shared between windows, so
several can be open in one process.
"""

from dataclasses import dataclass, field
from typing import Optional

from soconnect.application.sync.ports import ConversationView


@dataclass
class ConversationState:
    view: ConversationView
    counterparty: Optional[str] = None  # None while idle
    known_ids: frozenset[int] = field(default_factory=frozenset)
    # Bumped whenever a response started earlier must no longer be applied
    generation: int = 0

    @property
    def is_tracking(self) -> bool:
        return self.counterparty is not None
