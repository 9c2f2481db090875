"""Administrative user commands."""

from .delete_user import DeleteUserCommand, DeleteUserHandler, DeleteUserResult

__all__ = ["DeleteUserCommand", "DeleteUserHandler", "DeleteUserResult"]
