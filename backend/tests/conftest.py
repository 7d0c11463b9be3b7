"""Pytest configuration and fixtures."""

import os

# Settings are read on first import of the app; tests never talk to Postgres or Anthropic
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from app.api.deps import get_chat_service  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.models import User  # noqa: E402
from app.db.session import enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.access import create_session  # noqa: E402
from app.services.chat_service import ChatService  # noqa: E402
from app.services.errors import CollaboratorFailure  # noqa: E402


class FakeGenerator(ChatService):
    """Deterministic stand-in for the Anthropic-backed text generator."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None

    async def summarize(self, text: str, kind: str = "document") -> str:
        self.calls.append(("summarize", text, kind))
        if self.fail_with:
            raise self.fail_with
        return f"Summary of {len(text)} chars ({kind})"

    async def chat(self, message: str, context: str, history: list[dict]) -> str:
        self.calls.append(("chat", message, context, history))
        if self.fail_with:
            raise self.fail_with
        return "Here is what I found."


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database per test, with foreign keys enforced."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting state outside of requests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
async def client(session_factory, generator) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_service] = lambda: generator
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(db: AsyncSession, email: str) -> tuple[User, dict[str, str]]:
    user = User(email=email, name=email.split("@")[0], google_id=f"google-{email}")
    db.add(user)
    await db.flush()
    session = await create_session(db, user)
    await db.commit()
    return user, {"Authorization": f"Bearer {session.id}"}


@pytest.fixture
async def alice(db) -> tuple[User, dict[str, str]]:
    return await _make_user(db, "alice@example.com")


@pytest.fixture
async def bob(db) -> tuple[User, dict[str, str]]:
    return await _make_user(db, "bob@example.com")


@pytest.fixture
def collaborator_failure() -> CollaboratorFailure:
    return CollaboratorFailure("Failed to get response from model: overloaded")


async def create_workspace(client: AsyncClient, headers: dict | None = None, name: str = "Launch") -> dict:
    response = await client.post("/workspaces", json={"name": name}, headers=headers or {})
    assert response.status_code == 201, response.text
    return response.json()


async def create_binding(
    client: AsyncClient,
    workspace_id: str,
    headers: dict | None = None,
    type_: str = "doc_store",
    name: str = "Docs",
    config: dict | None = None,
) -> dict:
    response = await client.post(
        f"/workspaces/{workspace_id}/bindings",
        json={"type": type_, "name": name, "config": config or {}},
        headers=headers or {},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_artifact(
    client: AsyncClient,
    binding_id: str,
    headers: dict | None = None,
    name: str = "Plan.docx",
    kind: str = "document",
    content: str | None = "Ship the beta by Friday. Please review the launch checklist.",
) -> dict:
    response = await client.post(
        f"/bindings/{binding_id}/artifacts",
        json={"name": name, "kind": kind, "content": content},
        headers=headers or {},
    )
    assert response.status_code == 201, response.text
    return response.json()

