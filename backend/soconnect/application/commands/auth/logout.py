"""
Logout Command - best-effort session revocation.

Never fails the caller: unknown, expired or garbage tokens and store outages
are logged and swallowed so client-side cleanup always proceeds.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from soconnect.application.common.interfaces import Command, CommandHandler
from soconnect.domain.exceptions import AuthError, TransientStoreError
from soconnect.domain.ports.repositories import SessionRepository
from soconnect.infrastructure.security import SessionTokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogoutCommand(Command[None]):
    token: Optional[str]


class LogoutHandler(CommandHandler[None]):
    def __init__(
        self, session_repository: SessionRepository, tokens: SessionTokenService
    ):
        self._sessions = session_repository
        self._tokens = tokens

    async def execute(self, command: LogoutCommand) -> None:
        if not command.token:
            return
        try:
            session_id, user_code = self._tokens.read(command.token)
            await self._sessions.revoke(session_id)
            logger.info(f"[Auth] User {user_code.value} logged out")
        except AuthError:
            logger.debug("[Auth] Logout with unknown or expired token")
        except TransientStoreError as e:
            logger.warning(f"[Auth] Session revoke failed, token left to expire: {e}")
