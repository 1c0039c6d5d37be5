import dataclasses
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

import jwt
import pytest
from dishka import Provider, Scope, make_async_container, provide
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from chat_storage.config.settings import Config
from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.entities.chat_session import ChatSession
from chat_storage.domain.exceptions import RateLimitExceededError
from chat_storage.domain.ports.repositories import (
    MessageRepository,
    Page,
    PageRequest,
    SessionRepository,
    SessionSortField,
    SortDirection,
)
from chat_storage.domain.ports.services import (
    CompletionClient,
    CompletionOutcome,
    CompletionResult,
    EventPublisher,
    RateLimiter,
)
from chat_storage.domain.value_objects import MessageId, SessionId, UserId
from chat_storage.fastapi_app import create_fastapi_app
from chat_storage.setup.ioc.handlers import HandlerProvider

TEST_AUTH_SECRET = "test-secret-with-enough-bytes-for-hs256!"
TEST_AUDIENCE = "chat-storage-tests"
TEST_ISSUER = "chat-storage-test-issuer"


# =============================================================================
# IN-MEMORY PORTS
# =============================================================================


class StorageFailure(Exception):
    """Stands in for a database error raised by the persistence layer."""


class InMemoryMessageRepository(MessageRepository):
    def __init__(self):
        self.rows: list[ChatMessage] = []
        self._next_id = 1
        # sender value -> exception to raise on the next add for that sender
        self.fail_on: dict[str, Exception] = {}

    async def add(self, message: ChatMessage) -> ChatMessage:
        error = self.fail_on.pop(message.sender.value, None)
        if error is not None:
            raise error
        stored = dataclasses.replace(message, id=MessageId(self._next_id))
        self._next_id += 1
        self.rows.append(stored)
        return stored

    async def list_by_session(
        self, session_id: SessionId, page_request: PageRequest
    ) -> Page[ChatMessage]:
        matching = sorted(
            (m for m in self.rows if m.session_id == session_id),
            key=lambda m: (m.created_at, m.id.value),
            reverse=page_request.direction is SortDirection.DESC,
        )
        items = matching[page_request.offset : page_request.offset + page_request.size]
        return Page.of(items, page_request, len(matching))

    async def count_by_session(self, session_id: SessionId) -> int:
        return sum(1 for m in self.rows if m.session_id == session_id)

    def for_session(self, session_id: int) -> list[ChatMessage]:
        return [m for m in self.rows if m.session_id.value == session_id]


class InMemorySessionRepository(SessionRepository):
    def __init__(self, messages: Optional[InMemoryMessageRepository] = None):
        self.rows: dict[int, ChatSession] = {}
        self._next_id = 1
        self._messages = messages
        self.fail_on_save: Optional[Exception] = None

    async def get_owned(
        self, session_id: SessionId, user_id: UserId
    ) -> Optional[ChatSession]:
        row = self.rows.get(session_id.value)
        if row is None or not row.is_owned_by(user_id):
            return None
        return dataclasses.replace(row)

    async def list_by_user(
        self,
        user_id: UserId,
        page_request: PageRequest,
        sort_by: SessionSortField = SessionSortField.UPDATED_AT,
        favorites_only: bool = False,
    ) -> Page[ChatSession]:
        matching = [
            s
            for s in self.rows.values()
            if s.is_owned_by(user_id) and (s.is_favorite or not favorites_only)
        ]
        matching.sort(
            key=lambda s: (getattr(s, sort_by.value), s.id.value),
            reverse=page_request.direction is SortDirection.DESC,
        )
        items = matching[page_request.offset : page_request.offset + page_request.size]
        return Page.of([dataclasses.replace(s) for s in items], page_request, len(matching))

    async def save(self, session: ChatSession) -> ChatSession:
        if self.fail_on_save is not None:
            error, self.fail_on_save = self.fail_on_save, None
            raise error
        if session.id is None:
            session = dataclasses.replace(session, id=SessionId(self._next_id))
            self._next_id += 1
        self.rows[session.id.value] = dataclasses.replace(session)
        return session

    async def delete(self, session_id: SessionId) -> bool:
        removed = self.rows.pop(session_id.value, None)
        if removed is not None and self._messages is not None:
            self._messages.rows = [
                m for m in self._messages.rows if m.session_id != session_id
            ]
        return removed is not None

    def seed(
        self,
        user_id: str,
        session_name: str = "Seeded session",
        is_favorite: bool = False,
        age: timedelta = timedelta(hours=1),
    ) -> ChatSession:
        """Insert a session directly, with timestamps `age` in the past."""
        then = datetime.now(timezone.utc) - age
        session = ChatSession(
            id=SessionId(self._next_id),
            user_id=UserId(user_id),
            session_name=session_name,
            is_favorite=is_favorite,
            created_at=then,
            updated_at=then,
        )
        self._next_id += 1
        self.rows[session.id.value] = session
        return dataclasses.replace(session)


class RecordingEventPublisher(EventPublisher):
    def __init__(self):
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[str]:
        return [e.event_type.value for e in self.events]


class InMemoryRateLimiter(RateLimiter):
    """Fixed window that never rolls over unless reset() is called."""

    def __init__(self, max_requests: int = 100, window_seconds: int = 60):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.counts: dict[str, int] = {}
        self.checked: list[str] = []

    async def check(self, user_id: UserId) -> None:
        self.checked.append(user_id.value)
        current = self.counts.get(user_id.value, 0)
        if current >= self.max_requests:
            raise RateLimitExceededError(self.max_requests, self.window_seconds)
        self.counts[user_id.value] = current + 1

    def reset(self) -> None:
        self.counts.clear()


class ScriptedCompletionClient(CompletionClient):
    """Replies with `reply_for(user_text)` or a fixed degraded outcome."""

    def __init__(
        self,
        reply_for: Callable[[str], str] = lambda text: f"Echo: {text}",
        outcome: CompletionOutcome = CompletionOutcome.SUCCESS,
    ):
        self.reply_for = reply_for
        self.outcome = outcome
        self.calls: list[tuple[str, Optional[str]]] = []

    async def complete(
        self, user_text: str, prior_context: Optional[str] = None
    ) -> CompletionResult:
        self.calls.append((user_text, prior_context))
        if self.outcome is CompletionOutcome.SUCCESS:
            return CompletionResult.success(self.reply_for(user_text), prior_context)
        return CompletionResult.degraded_with(self.outcome, prior_context)


# =============================================================================
# FAKE REDIS (stream commands used by the event publisher)
# =============================================================================


class FakeRedis:
    """Just enough of redis.asyncio.Redis for RedisStreamEventPublisher."""

    def __init__(self):
        self.streams: dict[str, list[dict]] = {}
        self.xadd_calls: list[tuple[str, dict, dict]] = []
        self.xadd_failures = 0

    async def xadd(self, name, fields, id="*", maxlen=None, approximate=True, **kwargs):
        self.xadd_calls.append((name, dict(fields), {"maxlen": maxlen, "approximate": approximate}))
        if self.xadd_failures > 0:
            self.xadd_failures -= 1
            raise RedisConnectionError("stream unavailable")
        entries = self.streams.setdefault(name, [])
        entries.append(dict(fields))
        return f"{int(time.time() * 1000)}-{len(entries) - 1}"


# =============================================================================
# AUTH
# =============================================================================


@pytest.fixture(autouse=True)
def auth_config(monkeypatch):
    monkeypatch.setattr(Config, "SERVICE_AUTH_SECRET", TEST_AUTH_SECRET)
    monkeypatch.setattr(Config, "SERVICE_AUTH_AUDIENCE", TEST_AUDIENCE)
    monkeypatch.setattr(Config, "SERVICE_AUTH_ISSUER", TEST_ISSUER)


def service_token(
    sub: Union[str, None] = "alice",
    expires_in: int = 300,
    secret: str = TEST_AUTH_SECRET,
) -> str:
    now = int(time.time())
    claims = {
        "iat": now,
        "exp": now + expires_in,
        "iss": TEST_ISSUER,
        "aud": TEST_AUDIENCE,
    }
    if sub is not None:
        claims["sub"] = sub
    return jwt.encode(claims, secret, algorithm="HS256")


def bearer(sub: str = "alice") -> dict:
    return {"Authorization": f"Bearer {service_token(sub)}"}


# =============================================================================
# PORT FIXTURES
# =============================================================================


@pytest.fixture()
def message_repository():
    return InMemoryMessageRepository()


@pytest.fixture()
def session_repository(message_repository):
    return InMemorySessionRepository(message_repository)


@pytest.fixture()
def event_publisher():
    return RecordingEventPublisher()


@pytest.fixture()
def rate_limiter():
    return InMemoryRateLimiter(max_requests=100, window_seconds=60)


@pytest.fixture()
def completion_client():
    return ScriptedCompletionClient()


@pytest.fixture()
def fake_redis():
    return FakeRedis()


# =============================================================================
# APP WIRED AGAINST THE FAKES
# =============================================================================


class FakePortsProvider(Provider):
    scope = Scope.APP

    def __init__(self, sessions, messages, publisher, limiter, completion):
        super().__init__()
        self._sessions = sessions
        self._messages = messages
        self._publisher = publisher
        self._limiter = limiter
        self._completion = completion

    @provide
    def get_session_repository(self) -> SessionRepository:
        return self._sessions

    @provide
    def get_message_repository(self) -> MessageRepository:
        return self._messages

    @provide
    def get_event_publisher(self) -> EventPublisher:
        return self._publisher

    @provide
    def get_rate_limiter(self) -> RateLimiter:
        return self._limiter

    @provide
    def get_completion_client(self) -> CompletionClient:
        return self._completion


@pytest.fixture()
def app(
    session_repository,
    message_repository,
    event_publisher,
    rate_limiter,
    completion_client,
):
    """FastAPI app whose container resolves every port to an in-memory fake."""
    container = make_async_container(
        FakePortsProvider(
            session_repository,
            message_repository,
            event_publisher,
            rate_limiter,
            completion_client,
        ),
        HandlerProvider(),
    )
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    """Authentication headers with a valid JWT for user 'alice'."""
    return bearer("alice")
