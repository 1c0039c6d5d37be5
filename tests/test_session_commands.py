"""
Tests for session commands and the session/message queries.
Run with: pytest tests/test_session_commands.py -v
"""

from datetime import timedelta

import pytest

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
from chat_storage.application.queries.messages import (
    ListMessagesHandler,
    ListMessagesQuery,
)
from chat_storage.application.queries.sessions import (
    GetSessionHandler,
    GetSessionQuery,
    ListSessionsHandler,
    ListSessionsQuery,
)
from chat_storage.application.services import SessionGuard
from chat_storage.domain.entities import ChatMessage
from chat_storage.domain.exceptions import DomainValidationError, SessionNotFoundError
from chat_storage.domain.ports.repositories import (
    PageRequest,
    SessionSortField,
    SortDirection,
)
from chat_storage.domain.value_objects import SenderType, SessionId, UserId

ALICE = UserId("alice")
BOB = UserId("bob")


@pytest.fixture
def guard(session_repository):
    return SessionGuard(session_repository)


async def add_messages(message_repository, session_id: int, *contents: str):
    for content in contents:
        await message_repository.add(
            ChatMessage.create(SessionId(session_id), SenderType.USER, content)
        )


# =============================================================================
# SESSION GUARD
# =============================================================================


@pytest.mark.asyncio
async def test_guard_returns_owned_session(guard, session_repository):
    session = session_repository.seed("alice")
    loaded = await guard.load_owned(session.id, ALICE)
    assert loaded.id == session.id


@pytest.mark.asyncio
async def test_guard_hides_foreign_and_missing_sessions_alike(guard, session_repository):
    session = session_repository.seed("bob")

    with pytest.raises(SessionNotFoundError) as foreign:
        await guard.load_owned(session.id, ALICE)
    with pytest.raises(SessionNotFoundError) as missing:
        await guard.load_owned(SessionId(404), ALICE)

    assert str(foreign.value) == f"Session not found with id: {session.id.value}"
    assert str(missing.value) == "Session not found with id: 404"


# =============================================================================
# COMMANDS
# =============================================================================


@pytest.mark.asyncio
async def test_create_session(session_repository, event_publisher):
    handler = CreateSessionHandler(session_repository, event_publisher)

    summary = await handler.execute(CreateSessionCommand(ALICE, "Trip planning"))

    assert summary.session.id is not None
    assert summary.session.session_name == "Trip planning"
    assert summary.message_count == 0
    assert summary.session.id.value in session_repository.rows
    assert event_publisher.event_types == ["SESSION_CREATED"]


@pytest.mark.asyncio
async def test_create_session_requires_name(session_repository, event_publisher):
    handler = CreateSessionHandler(session_repository, event_publisher)

    with pytest.raises(DomainValidationError):
        await handler.execute(CreateSessionCommand(ALICE, "  "))

    assert session_repository.rows == {}
    assert event_publisher.events == []


@pytest.mark.asyncio
async def test_rename_session(
    guard, session_repository, message_repository, event_publisher
):
    session = session_repository.seed("alice", "Old name")
    await add_messages(message_repository, session.id.value, "a", "b")
    handler = RenameSessionHandler(
        guard, session_repository, message_repository, event_publisher
    )

    summary = await handler.execute(RenameSessionCommand(session.id, ALICE, "New name"))

    assert summary.session.session_name == "New name"
    assert summary.message_count == 2
    assert session_repository.rows[session.id.value].session_name == "New name"
    assert session_repository.rows[session.id.value].updated_at > session.updated_at
    assert event_publisher.event_types == ["SESSION_RENAMED"]


@pytest.mark.asyncio
async def test_rename_foreign_session_is_not_found(
    guard, session_repository, message_repository, event_publisher
):
    session = session_repository.seed("bob", "Bob's")
    handler = RenameSessionHandler(
        guard, session_repository, message_repository, event_publisher
    )

    with pytest.raises(SessionNotFoundError):
        await handler.execute(RenameSessionCommand(session.id, ALICE, "Mine now"))

    assert session_repository.rows[session.id.value].session_name == "Bob's"


@pytest.mark.asyncio
async def test_toggle_favorite_publishes_matching_event(
    guard, session_repository, message_repository, event_publisher
):
    session = session_repository.seed("alice")
    handler = ToggleFavoriteHandler(
        guard, session_repository, message_repository, event_publisher
    )

    first = await handler.execute(ToggleFavoriteCommand(session.id, ALICE))
    second = await handler.execute(ToggleFavoriteCommand(session.id, ALICE))

    assert first.session.is_favorite is True
    assert second.session.is_favorite is False
    assert event_publisher.event_types == ["SESSION_FAVORITED", "SESSION_UNFAVORITED"]


@pytest.mark.asyncio
async def test_delete_session_cascades_messages(
    guard, session_repository, message_repository, event_publisher
):
    session = session_repository.seed("alice", "Doomed")
    await add_messages(message_repository, session.id.value, "x", "y")
    handler = DeleteSessionHandler(guard, session_repository, event_publisher)

    await handler.execute(DeleteSessionCommand(session.id, ALICE))

    assert session.id.value not in session_repository.rows
    assert message_repository.rows == []
    [event] = event_publisher.events
    assert event.event_type.value == "SESSION_DELETED"
    assert event.session_name == "Doomed"


@pytest.mark.asyncio
async def test_delete_foreign_session_is_not_found(
    guard, session_repository, event_publisher
):
    session = session_repository.seed("bob")
    handler = DeleteSessionHandler(guard, session_repository, event_publisher)

    with pytest.raises(SessionNotFoundError):
        await handler.execute(DeleteSessionCommand(session.id, ALICE))

    assert session.id.value in session_repository.rows
    assert event_publisher.events == []


# =============================================================================
# QUERIES
# =============================================================================


@pytest.mark.asyncio
async def test_list_sessions_most_recent_first(session_repository, message_repository):
    old = session_repository.seed("alice", "old", age=timedelta(days=2))
    new = session_repository.seed("alice", "new", age=timedelta(minutes=1))
    session_repository.seed("bob", "not mine")
    await add_messages(message_repository, new.id.value, "hi")
    handler = ListSessionsHandler(session_repository, message_repository)

    page = await handler.execute(
        ListSessionsQuery(ALICE, PageRequest(page=0, size=10, direction=SortDirection.DESC))
    )

    assert [s.session.session_name for s in page.items] == ["new", "old"]
    assert [s.message_count for s in page.items] == [1, 0]
    assert page.total_items == 2
    assert old.id in [s.session.id for s in page.items]


@pytest.mark.asyncio
async def test_list_sessions_paginates_and_sorts_by_name(
    session_repository, message_repository
):
    for name in ("charlie", "alpha", "bravo"):
        session_repository.seed("alice", name)
    handler = ListSessionsHandler(session_repository, message_repository)

    page = await handler.execute(
        ListSessionsQuery(
            ALICE,
            PageRequest(page=1, size=2, direction=SortDirection.ASC),
            sort_by=SessionSortField.SESSION_NAME,
        )
    )

    assert [s.session.session_name for s in page.items] == ["charlie"]
    assert page.total_pages == 2
    assert page.is_last and page.has_previous


@pytest.mark.asyncio
async def test_list_favorites_only(session_repository, message_repository):
    session_repository.seed("alice", "plain")
    session_repository.seed("alice", "starred", is_favorite=True)
    handler = ListSessionsHandler(session_repository, message_repository)

    page = await handler.execute(
        ListSessionsQuery(ALICE, PageRequest(), favorites_only=True)
    )

    assert [s.session.session_name for s in page.items] == ["starred"]


@pytest.mark.asyncio
async def test_get_session_counts_messages(guard, session_repository, message_repository):
    session = session_repository.seed("alice")
    await add_messages(message_repository, session.id.value, "1", "2", "3")

    summary = await GetSessionHandler(guard, message_repository).execute(
        GetSessionQuery(session.id, ALICE)
    )

    assert summary.message_count == 3


@pytest.mark.asyncio
async def test_list_messages_oldest_first(guard, session_repository, message_repository):
    session = session_repository.seed("alice")
    await add_messages(message_repository, session.id.value, "first", "second", "third")
    handler = ListMessagesHandler(guard, message_repository)

    page = await handler.execute(
        ListMessagesQuery(session.id, ALICE, PageRequest(page=0, size=2))
    )

    assert [m.content for m in page.items] == ["first", "second"]
    assert page.total_items == 3
    assert page.has_next


@pytest.mark.asyncio
async def test_list_messages_of_foreign_session(guard, session_repository, message_repository):
    session = session_repository.seed("bob")
    await add_messages(message_repository, session.id.value, "secret")

    with pytest.raises(SessionNotFoundError):
        await ListMessagesHandler(guard, message_repository).execute(
            ListMessagesQuery(session.id, ALICE, PageRequest())
        )
