"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lorekeeper.config import Settings
from lorekeeper.container import Services, build_services
from lorekeeper.infrastructure.database import create_session_factory
from lorekeeper.infrastructure.models import Base
from lorekeeper.main import create_app
from lorekeeper.services.cache import ResponseCache


class FakeTextGenerator:
    """Test double for the text-generation service that records every call."""

    def __init__(
        self,
        reply: Callable[[list[dict[str, str]]], str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.reply = reply or (lambda messages: f"  generated reply {len(self.calls)}  ")
        self.error = error
        self.calls: list[list[dict[str, str]]] = []
        # Open by default; tests clear it to hold generation mid-flight
        self.gate = asyncio.Event()
        self.gate.set()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def generate(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply(messages)


class FakeVectorSink:
    """Collects everything added to the vector store."""

    def __init__(self, error: Exception | None = None) -> None:
        self.added: list[dict] = []
        self.error = error

    async def add(self, ids, documents, metadatas) -> None:
        if self.error is not None:
            raise self.error
        self.added.append({"ids": ids, "documents": documents, "metadatas": metadatas})


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(_env_file=None, openai_api_key="test-key")


@pytest.fixture
async def test_engine(tmp_path):
    """Create test database engine backed by a throwaway SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(test_engine)


@pytest.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def fake_sink() -> FakeVectorSink:
    return FakeVectorSink()


@pytest.fixture
def services(settings, session_factory, fake_generator, fake_sink) -> Services:
    return build_services(
        settings,
        session_factory=session_factory,
        generator=fake_generator,
        vector_sink=fake_sink,
        cache=ResponseCache(),
    )


@pytest.fixture
async def client(settings, services) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    app = create_app(settings=settings, services=services)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    await services.job_tracker.drain()
