"""
Authentication Dependency for FastAPI.

- Extracts the bearer token from the Authorization header
- Asks the session authority (AuthorizeHandler) whether it is still live
- Returns AuthorizedUser for use in route handlers

A missing, expired or revoked token raises UnauthenticatedError, which the
app maps to 401 {"error": "Unauthenticated"}. Clients treat that as a forced
logout.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from soconnect.application.queries.auth import (
    AuthorizedUser,
    AuthorizeHandler,
    AuthorizeQuery,
)
from soconnect.domain.exceptions import UnauthenticatedError

# auto_error=False: a missing header must produce our 401 body, not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(get_bearer_token),
) -> AuthorizedUser:
    if not token:
        raise UnauthenticatedError("Missing session token")
    handler = await request.state.dishka_container.get(AuthorizeHandler)
    return await handler.execute(AuthorizeQuery(token=token))
