"""
Admin API Router - administrative hard deletion.

DELETE /admin/users/{code}, header X-Admin-Key must equal ADMIN_API_KEY.
With ADMIN_API_KEY unset the route answers 404 as if it did not exist.
"""

import secrets
from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel

from soconnect.application.commands.users import DeleteUserCommand, DeleteUserHandler
from soconnect.config.settings import Config
from soconnect.domain.value_objects.user_code import UserCode

logger = getLogger(__name__)


class DeleteUserResponse(BaseModel):
    code: str
    messages_deleted: int


async def require_admin_key(x_admin_key: Optional[str] = Header(default=None)) -> None:
    if not Config.ADMIN_API_KEY:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    if not x_admin_key or not secrets.compare_digest(
        x_admin_key.encode(), Config.ADMIN_API_KEY.encode()
    ):
        logger.warning("[Admin] Rejected request with a bad admin key")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)]
)


@router.delete("/users/{code}", response_model=DeleteUserResponse)
@inject
async def delete_user(code: str, handler: FromDishka[DeleteUserHandler]):
    result = await handler.execute(DeleteUserCommand(code=UserCode(code)))
    return DeleteUserResponse(
        code=result.code.value, messages_deleted=result.messages_deleted
    )
