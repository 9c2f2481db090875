"""Auth DTOs for API request/response."""

from pydantic import BaseModel


class UserDTO(BaseModel):
    """Minimal public profile. Never carries the passcode."""

    code: str
    name: str


class LoginResultDTO(BaseModel):
    token: str
    user: UserDTO
