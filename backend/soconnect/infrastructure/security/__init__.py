"""Credential and token primitives used by the session authority."""

from soconnect.infrastructure.security.passcode_hasher import PasscodeHasher
from soconnect.infrastructure.security.session_tokens import SessionTokenService

__all__ = ["PasscodeHasher", "SessionTokenService"]
