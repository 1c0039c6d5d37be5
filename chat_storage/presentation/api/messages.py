"""
Messages API Router - the message exchange and session history.

POST stores the caller's message and the assistant reply in one call and
returns both, user message first. The exchange itself enforces the rate
limit, so this router does not check it again for POST.
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel

from chat_storage.application.commands.chat import (
    AddMessageCommand,
    AddMessageHandler,
)
from chat_storage.application.dto import MessageDTO, PageDTO
from chat_storage.application.queries.messages import (
    ListMessagesHandler,
    ListMessagesQuery,
)
from chat_storage.config.settings import Config
from chat_storage.domain.ports.repositories import SortDirection
from chat_storage.domain.ports.services import RateLimiter
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.presentation.api.errors import (
    DOMAIN_ERRORS,
    page_request,
    to_http_exception,
)
from chat_storage.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


class AddMessageRequest(BaseModel):
    content: str
    context: Optional[str] = None


router = APIRouter(prefix="/api/sessions", tags=["messages"])


@router.post(
    "/{session_id}/messages",
    response_model=list[MessageDTO],
    status_code=status.HTTP_201_CREATED,
)
@inject
async def add_message(
    request: AddMessageRequest,
    handler: FromDishka[AddMessageHandler],
    session_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Add a user message and the generated assistant reply.

    Provider failures never fail the request: the assistant message then
    carries a substitute reply. Storage failures surface as 500.
    """
    try:
        result = await handler.execute(
            AddMessageCommand(
                session_id=SessionId(session_id),
                user_id=current_user.user_id,
                content=request.content,
                context=request.context,
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return [MessageDTO.from_entity(message) for message in result.messages]


@router.get("/{session_id}/messages", response_model=PageDTO[MessageDTO])
@inject
async def list_messages(
    handler: FromDishka[ListMessagesHandler],
    rate_limiter: FromDishka[RateLimiter],
    session_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
    page: int = 0,
    size: int = Config.MESSAGE_PAGE_SIZE,
    direction: SortDirection = SortDirection.ASC,
):
    """Message history of one session, oldest first by default."""
    try:
        paging = page_request(page, size, direction)
        await rate_limiter.check(current_user.user_id)
        result = await handler.execute(
            ListMessagesQuery(
                session_id=SessionId(session_id),
                user_id=current_user.user_id,
                page_request=paging,
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return PageDTO[MessageDTO].from_page(result, MessageDTO.from_entity)
