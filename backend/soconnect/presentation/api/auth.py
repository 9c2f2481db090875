"""
Auth API Router - register, login, logout.

POST /register {name, code, passcode} → 201 {"ok": true}
POST /login    {code, passcode}       → {"token", "user": {"code", "name"}}
POST /logout   (bearer, optional)     → {"ok": true}, always
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from soconnect.application.commands.auth import (
    LoginCommand,
    LoginHandler,
    LogoutCommand,
    LogoutHandler,
    RegisterUserCommand,
    RegisterUserHandler,
)
from soconnect.application.dto.auth import LoginResultDTO, UserDTO
from soconnect.config.settings import Config
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.presentation.dependencies.auth import get_bearer_token
from soconnect.presentation.rate_limit import limiter

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class RegisterRequest(BaseModel):
    name: str
    code: str
    passcode: str


class LoginRequest(BaseModel):
    code: str
    passcode: str


class OkResponse(BaseModel):
    ok: bool = True


# ==================== ROUTER ====================

router = APIRouter(tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post("/register", response_model=OkResponse, status_code=status.HTTP_201_CREATED)
@inject
async def register(
    body: RegisterRequest,
    handler: FromDishka[RegisterUserHandler],
):
    await handler.execute(
        RegisterUserCommand(
            name=body.name,
            code=UserCode(body.code),
            passcode=body.passcode,
        )
    )
    return OkResponse()


@router.post("/login", response_model=LoginResultDTO)
@limiter.limit(Config.LOGIN_RATE_LIMIT)
@inject
async def login(
    request: Request,
    body: LoginRequest,
    handler: FromDishka[LoginHandler],
):
    """Rate limited per client address (LOGIN_RATE_LIMIT)."""
    result = await handler.execute(
        LoginCommand(code=UserCode(body.code), passcode=body.passcode)
    )
    return LoginResultDTO(
        token=result.token,
        user=UserDTO(code=result.user.code.value, name=result.user.name),
    )


@router.post("/logout", response_model=OkResponse)
@inject
async def logout(
    handler: FromDishka[LogoutHandler],
    token: Optional[str] = Depends(get_bearer_token),
):
    await handler.execute(LogoutCommand(token=token))
    return OkResponse()
