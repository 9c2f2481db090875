"""
MessageId Value Object - monotonic integer assigned by the message log.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class MessageId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Message ID must be an integer: {self.value!r}")
        if self.value < 1:
            raise ValueError(f"Message ID must be positive: {self.value}")

    def __str__(self) -> str:
        return str(self.value)
