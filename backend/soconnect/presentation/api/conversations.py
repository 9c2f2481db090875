"""
Conversations API Router.

GET /conversations                      → [ConversationSummaryDTO], most recent first
GET /conversations/{counterparty_code}  → [MessageDTO], oldest first
    ?limit=N&before_id=ID pages backwards from the newest message
"""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query

from soconnect.application.dto.conversation import ConversationSummaryDTO
from soconnect.application.dto.message import MessageDTO
from soconnect.application.queries.auth import AuthorizedUser
from soconnect.application.queries.conversations import (
    GetConversationHandler,
    GetConversationQuery,
    ListConversationsHandler,
    ListConversationsQuery,
)
from soconnect.domain.value_objects.message_id import MessageId
from soconnect.domain.value_objects.user_code import UserCode
from soconnect.presentation.dependencies.auth import get_current_user

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationSummaryDTO])
@inject
async def list_conversations(
    handler: FromDishka[ListConversationsHandler],
    current_user: AuthorizedUser = Depends(get_current_user),
):
    summaries = await handler.execute(ListConversationsQuery(user_code=current_user.code))
    return [ConversationSummaryDTO.from_entity(s) for s in summaries]


@router.get("/{counterparty_code}", response_model=list[MessageDTO])
@inject
async def get_conversation(
    counterparty_code: str,
    handler: FromDishka[GetConversationHandler],
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    before_id: Optional[int] = Query(default=None, ge=1),
    current_user: AuthorizedUser = Depends(get_current_user),
):
    messages = await handler.execute(
        GetConversationQuery(
            user_code=current_user.code,
            counterparty=UserCode(counterparty_code),
            limit=limit,
            before_id=MessageId(before_id) if before_id is not None else None,
        )
    )
    return [MessageDTO.from_entity(m) for m in messages]
