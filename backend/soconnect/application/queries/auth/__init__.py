"""Session authority queries."""

from soconnect.application.queries.auth.authorize import (
    AuthorizeQuery,
    AuthorizeHandler,
    AuthorizedUser,
)

__all__ = ["AuthorizeQuery", "AuthorizeHandler", "AuthorizedUser"]
