"""
Session tokens.

Tokens are HS256 JWTs carrying the user code (`sub`) and the session id
(`sid`). Only the session authority reads them; everywhere else they are
opaque strings.
"""

import logging
from datetime import timedelta

import jwt

from soconnect.domain.entities.session import Session
from soconnect.domain.exceptions import (
    InvalidUserCodeError,
    UnauthenticatedError,
)
from soconnect.domain.value_objects.user_code import UserCode

logger = logging.getLogger(__name__)


class SessionTokenService:
    ALGORITHM = "HS256"

    def __init__(self, secret: str, issuer: str, ttl: timedelta):
        if not secret:
            raise ValueError("Session secret cannot be empty")
        self._secret = secret
        self._issuer = issuer
        self.ttl = ttl

    def issue(self, session: Session) -> str:
        claims = {
            "sub": session.user_code.value,
            "sid": session.id,
            "iat": session.issued_at,
            "exp": session.expires_at,
            "iss": self._issuer,
        }
        return jwt.encode(claims, self._secret, algorithm=self.ALGORITHM)

    def read(self, token: str) -> tuple[str, UserCode]:
        """
        Validate signature, issuer and expiry.

        Returns:
            (session_id, user_code)

        Raises:
            UnauthenticatedError if the token is malformed, forged or expired
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "sub", "sid"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthenticatedError("Session has expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug(f"[Auth] Rejected token: {e}")
            raise UnauthenticatedError("Invalid session token") from e

        try:
            return claims["sid"], UserCode(claims["sub"])
        except InvalidUserCodeError as e:
            raise UnauthenticatedError("Invalid session token") from e
