"""
User Entity - A registered participant identified by a five-digit code.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone

from soconnect.domain.value_objects.user_code import UserCode


@dataclass
class User:
    code: UserCode
    name: str
    passcode_hash: str
    created_at: datetime

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("User name cannot be empty")

    @classmethod
    def create(cls, code: UserCode, name: str, passcode_hash: str) -> User:
        return cls(
            code=code,
            name=name.strip(),
            passcode_hash=passcode_hash,
            created_at=datetime.now(timezone.utc),
        )
