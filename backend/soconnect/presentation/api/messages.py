"""
Messages API Router.

POST /messages {to, text} → {"message": MessageDTO}
The sender is always the token's user.
"""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from soconnect.application.commands.messages import (
    SendMessageCommand,
    SendMessageHandler,
)
from soconnect.application.dto.message import MessageDTO
from soconnect.application.queries.auth import AuthorizedUser
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.presentation.dependencies.auth import get_current_user


class SendMessageRequest(BaseModel):
    to: str
    text: Optional[str] = None


class MessageResponse(BaseModel):
    message: MessageDTO


router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@inject
async def send_message(
    body: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    current_user: AuthorizedUser = Depends(get_current_user),
):
    message = await handler.execute(
        SendMessageCommand(
            sender=current_user.code,
            recipient=UserCode(body.to),
            text=body.text,
        )
    )
    return MessageResponse(message=MessageDTO.from_entity(message))
