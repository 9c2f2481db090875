"""Pure domain services (no I/O)."""

from soconnect.domain.services.conversation_index import (
    build_conversation_index,
    order_conversation,
)

__all__ = ["build_conversation_index", "order_conversation"]
