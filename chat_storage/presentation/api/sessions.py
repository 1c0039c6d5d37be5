"""
Sessions API Router - FastAPI endpoints for chat session management.

- Receives handlers via Dependency Injection (Dishka)
- Thin layer: only handles HTTP concerns (request/response)
- Every endpoint counts against the caller's rate limit

Flow:
  HTTP Request → Router → Command/Query → Handler → Repository → Database
                                 ↓
  HTTP Response ← Router ← DTO ← Result
"""

from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel

from chat_storage.application.commands.sessions import (
    CreateSessionCommand,
    CreateSessionHandler,
    DeleteSessionCommand,
    DeleteSessionHandler,
    RenameSessionCommand,
    RenameSessionHandler,
    ToggleFavoriteCommand,
    ToggleFavoriteHandler,
)
from chat_storage.application.dto import PageDTO, SessionDTO
from chat_storage.application.queries.sessions import (
    GetSessionHandler,
    GetSessionQuery,
    ListSessionsHandler,
    ListSessionsQuery,
)
from chat_storage.config.settings import Config
from chat_storage.domain.ports.repositories import SessionSortField, SortDirection
from chat_storage.domain.ports.services import RateLimiter
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.presentation.api.errors import (
    DOMAIN_ERRORS,
    page_request,
    to_http_exception,
)
from chat_storage.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST MODELS ====================


class CreateSessionRequest(BaseModel):
    session_name: str


class RenameSessionRequest(BaseModel):
    session_name: str


# ==================== ROUTER ====================

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


# ==================== ENDPOINTS ====================


@router.post("", response_model=SessionDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_session(
    request: CreateSessionRequest,
    handler: FromDishka[CreateSessionHandler],
    rate_limiter: FromDishka[RateLimiter],
    current_user: AuthUser = Depends(get_current_user),
):
    """Create a new, empty chat session."""
    try:
        await rate_limiter.check(current_user.user_id)
        summary = await handler.execute(
            CreateSessionCommand(
                user_id=current_user.user_id, session_name=request.session_name
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return SessionDTO.from_summary(summary)


@router.get("", response_model=PageDTO[SessionDTO])
@inject
async def list_sessions(
    handler: FromDishka[ListSessionsHandler],
    rate_limiter: FromDishka[RateLimiter],
    current_user: AuthUser = Depends(get_current_user),
    page: int = 0,
    size: int = Config.SESSION_PAGE_SIZE,
    sort_by: SessionSortField = SessionSortField.UPDATED_AT,
    direction: SortDirection = SortDirection.DESC,
):
    """List the caller's sessions, most recently active first by default."""
    try:
        paging = page_request(page, size, direction)
        await rate_limiter.check(current_user.user_id)
        result = await handler.execute(
            ListSessionsQuery(
                user_id=current_user.user_id,
                page_request=paging,
                sort_by=sort_by,
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return PageDTO[SessionDTO].from_page(result, SessionDTO.from_summary)


@router.get("/favorites", response_model=PageDTO[SessionDTO])
@inject
async def list_favorite_sessions(
    handler: FromDishka[ListSessionsHandler],
    rate_limiter: FromDishka[RateLimiter],
    current_user: AuthUser = Depends(get_current_user),
    page: int = 0,
    size: int = Config.SESSION_PAGE_SIZE,
):
    try:
        paging = page_request(page, size, SortDirection.DESC)
        await rate_limiter.check(current_user.user_id)
        result = await handler.execute(
            ListSessionsQuery(
                user_id=current_user.user_id,
                page_request=paging,
                favorites_only=True,
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return PageDTO[SessionDTO].from_page(result, SessionDTO.from_summary)


@router.get("/{session_id}", response_model=SessionDTO)
@inject
async def get_session(
    handler: FromDishka[GetSessionHandler],
    rate_limiter: FromDishka[RateLimiter],
    session_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        await rate_limiter.check(current_user.user_id)
        summary = await handler.execute(
            GetSessionQuery(
                session_id=SessionId(session_id), user_id=current_user.user_id
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return SessionDTO.from_summary(summary)


@router.put("/{session_id}", response_model=SessionDTO)
@inject
async def rename_session(
    request: RenameSessionRequest,
    handler: FromDishka[RenameSessionHandler],
    rate_limiter: FromDishka[RateLimiter],
    session_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        await rate_limiter.check(current_user.user_id)
        summary = await handler.execute(
            RenameSessionCommand(
                session_id=SessionId(session_id),
                user_id=current_user.user_id,
                session_name=request.session_name,
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return SessionDTO.from_summary(summary)


@router.patch("/{session_id}/favorite", response_model=SessionDTO)
@inject
async def toggle_favorite(
    handler: FromDishka[ToggleFavoriteHandler],
    rate_limiter: FromDishka[RateLimiter],
    session_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        await rate_limiter.check(current_user.user_id)
        summary = await handler.execute(
            ToggleFavoriteCommand(
                session_id=SessionId(session_id), user_id=current_user.user_id
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return SessionDTO.from_summary(summary)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_session(
    handler: FromDishka[DeleteSessionHandler],
    rate_limiter: FromDishka[RateLimiter],
    session_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
):
    """Delete a session together with its messages."""
    try:
        await rate_limiter.check(current_user.user_id)
        await handler.execute(
            DeleteSessionCommand(
                session_id=SessionId(session_id), user_id=current_user.user_id
            )
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
