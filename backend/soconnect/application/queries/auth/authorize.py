"""
Authorize Query - the single gate in front of every authenticated operation.

A token authorizes its user only while:
1. its signature, issuer and expiry check out, and
2. its session id is still live in the session registry and bound to the
   same user code (logout and newer logins revoke it).
"""

from dataclasses import dataclass

from soconnect.application.common.interfaces import Query, QueryHandler
from soconnect.domain.exceptions import UnauthenticatedError
from soconnect.domain.ports.repositories import SessionRepository
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.infrastructure.security import SessionTokenService


@dataclass(frozen=True)
class AuthorizedUser:
    code: UserCode
    session_id: str


@dataclass(frozen=True)
class AuthorizeQuery(Query[AuthorizedUser]):
    token: str


class AuthorizeHandler(QueryHandler[AuthorizedUser]):
    def __init__(
        self, session_repository: SessionRepository, tokens: SessionTokenService
    ):
        self._sessions = session_repository
        self._tokens = tokens

    async def execute(self, query: AuthorizeQuery) -> AuthorizedUser:
        if not query.token:
            raise UnauthenticatedError("Missing session token")
        session_id, user_code = self._tokens.read(query.token)
        owner = await self._sessions.get_owner(session_id)
        if owner is None or owner != user_code:
            raise UnauthenticatedError("Session is no longer active")
        return AuthorizedUser(code=user_code, session_id=session_id)
