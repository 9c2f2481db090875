"""
ConversationKey Value Object - canonical identity of a two-party conversation.

(A, B) and (B, A) collapse to the same key because the codes are stored sorted.
"""

from __future__ import annotations
from dataclasses import dataclass

from soconnect.domain.exceptions.validation_error import SameParticipantError
from soconnect.domain.value_objects.user_code import UserCode


@dataclass(frozen=True)
class ConversationKey:
    low: UserCode
    high: UserCode

    def __post_init__(self):
        if self.low == self.high:
            raise SameParticipantError("A conversation needs two distinct users")
        if self.low.value > self.high.value:
            raise ValueError("ConversationKey codes must be sorted; use between()")

    @classmethod
    def between(cls, a: UserCode, b: UserCode) -> ConversationKey:
        low, high = sorted((a, b), key=lambda code: code.value)
        return cls(low=low, high=high)

    def includes(self, code: UserCode) -> bool:
        return code == self.low or code == self.high

    def other(self, code: UserCode) -> UserCode:
        """Return the participant that is not `code`."""
        if code == self.low:
            return self.high
        if code == self.high:
            return self.low
        raise ValueError(f"{code} is not part of conversation {self}")

    def __str__(self) -> str:
        return f"{self.low.value}:{self.high.value}"
