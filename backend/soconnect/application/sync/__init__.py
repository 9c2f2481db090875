"""
SYNC - client-side conversation synchronization

- state.py  → ConversationState (one per open chat window)
- engine.py → SyncEngine + PollOutcome (open / poll / send / close)
- poller.py → ConversationPoller (cancellable repeating poll task per conversation)
- ports.py  → MessageSource, ConversationView
"""

from soconnect.application.sync.engine import PollOutcome, SyncEngine
from soconnect.application.sync.poller import ConversationPoller
from soconnect.application.sync.ports import ConversationView, MessageSource
from soconnect.application.sync.state import ConversationState

__all__ = [
    "ConversationPoller",
    "ConversationState",
    "ConversationView",
    "MessageSource",
    "PollOutcome",
    "SyncEngine",
]
