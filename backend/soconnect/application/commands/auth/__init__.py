"""Session authority commands."""

from .register_user import RegisterUserCommand, RegisterUserHandler
from .login import LoginCommand, LoginHandler, LoginResult
from .logout import LogoutCommand, LogoutHandler

__all__ = [
    "RegisterUserCommand",
    "RegisterUserHandler",
    "LoginCommand",
    "LoginHandler",
    "LoginResult",
    "LogoutCommand",
    "LogoutHandler",
]
