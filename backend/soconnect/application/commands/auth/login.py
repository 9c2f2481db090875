"""
Login Command - exchange code + passcode for a session token.

Steps:
1. Load user by code
2. Compare passcode against the stored salted hash
3. Revoke the user's previous session (single session per user)
4. Start and store a new session, return its token
"""

import logging
from dataclasses import dataclass

from soconnect.application.common.interfaces import Command, CommandHandler
from soconnect.domain.entities.session import Session
from soconnect.domain.entities.user import User
from soconnect.domain.exceptions import InvalidCredentialsError
from soconnect.domain.ports.repositories import SessionRepository, UserRepository
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.security import PasscodeHasher, SessionTokenService

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    user: User


@dataclass(frozen=True)
class LoginCommand(Command[LoginResult]):
    code: UserCode
    passcode: str


class LoginHandler(CommandHandler[LoginResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        hasher: PasscodeHasher,
        tokens: SessionTokenService,
        single_session: bool = True,
    ):
        self._users = user_repository
        self._sessions = session_repository
        self._hasher = hasher
        self._tokens = tokens
        self._single_session = single_session

    async def execute(self, command: LoginCommand) -> LoginResult:
        user = await self._users.get_by_code(command.code)
        if user is None:
            self._hasher.burn(command.passcode)
            logger.info(f"[Auth] Login failed for {command.code.value}")
            raise InvalidCredentialsError()
        if not self._hasher.verify(command.passcode, user.passcode_hash):
            logger.info(f"[Auth] Login failed for {command.code.value}")
            raise InvalidCredentialsError()

        if self._single_session:
            await self._sessions.revoke_user(user.code)

        session = Session.start(user.code, self._tokens.ttl)
        await self._sessions.save(session)
        logger.info(f"[Auth] User {user.code.value} logged in")
        return LoginResult(token=self._tokens.issue(session), user=user)
