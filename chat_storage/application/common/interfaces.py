"""
Base interfaces for CQRS pattern.

Usage:
    @dataclass(frozen=True)
    class CreateSessionCommand(Command[SessionSummary]):
        user_id: UserId
        session_name: str

    class CreateSessionHandler(CommandHandler[SessionSummary]):
        def __init__(self, session_repository: SessionRepository, ...):
            self._session_repository = session_repository

        async def execute(self, command: CreateSessionCommand) -> SessionSummary:
            session = await self._session_repository.save(ChatSession.create(...))
            ...
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")


class Command(ABC, Generic[T]):
    """Base class for write operations"""
    pass


class CommandHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, command: Command[T]) -> T:
        """Execute the command and return a result of type T"""
        ...


class Query(ABC, Generic[T]):
    """Base class for read operations"""
    pass


class QueryHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, query: Query[T]) -> T:
        """Execute the query and return a result of type T"""
        ...
