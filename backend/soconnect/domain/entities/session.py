"""
Session Entity - a live login bound to exactly one user code.
"""

from __future__ import annotations
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from soconnect.domain.value_objects.user_code import UserCode


@dataclass(frozen=True)
class Session:
    id: str
    user_code: UserCode
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def start(cls, user_code: UserCode, ttl: timedelta) -> Session:
        now = datetime.now(timezone.utc)
        return cls(
            id=secrets.token_urlsafe(24),
            user_code=user_code,
            issued_at=now,
            expires_at=now + ttl,
        )

    @property
    def ttl_seconds(self) -> int:
        remaining = (self.expires_at - datetime.now(timezone.utc)).total_seconds()
        return max(int(remaining), 1)
