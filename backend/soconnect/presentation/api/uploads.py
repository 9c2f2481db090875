"""
Upload API Router - attachment pipeline entry point.

POST /upload (multipart: to, file, caption?) → {"message": MessageDTO}
- 400 UnsupportedType for types outside MIME_TYPES
- 413 AttachmentTooLarge above MAX_UPLOAD_MB
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from soconnect.application.commands.messages import (
    UploadAttachmentCommand,
    UploadAttachmentHandler,
)
from soconnect.application.dto.message import MessageDTO
from soconnect.application.queries.auth import AuthorizedUser
from soconnect.config.settings import Config
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.presentation.api.messages import MessageResponse
from soconnect.presentation.dependencies.auth import get_current_user

logger = getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@inject
async def upload(
    handler: FromDishka[UploadAttachmentHandler],
    to: str = Form(...),
    file: UploadFile = File(...),
    caption: Optional[str] = Form(default=None),
    current_user: AuthorizedUser = Depends(get_current_user),
):
    # One byte past the ceiling is enough to know it is too large
    content = await file.read(Config.MAX_UPLOAD_BYTES + 1)
    message = await handler.execute(
        UploadAttachmentCommand(
            sender=current_user.code,
            recipient=UserCode(to),
            content=content,
            filename=file.filename or "",
            mime_type=file.content_type or "",
            caption=caption,
        )
    )
    return MessageResponse(message=MessageDTO.from_entity(message))
