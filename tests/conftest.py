"""
Pytest fixtures для тестов.

Предоставляет:
- test_engine / test_db: изолированная SQLite in-memory БД для каждого теста
- tagging / tag_service / group_service / post_service: сервисы на test_db
- test_client: HTTP клиент для тестирования API endpoints
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tagging.api.dependencies import get_db, get_tagging_config
from tagging.core.config import TaggingConfig, settings
from tagging.core.database import drop_db, init_db, make_engine, make_session_factory
from tagging.main import app
from tagging.models import Note, Post
from tagging.services import PostService, TagGroupService, TaggingService, TagService

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Создаёт async engine для тестовой БД (SQLite in-memory).

    StaticPool (внутри make_engine) обеспечивает одно и то же соединение,
    что критично для in-memory БД (иначе данные теряются).

    Таблицы пересоздаются для каждого теста.
    """
    engine = make_engine(TEST_DATABASE_URL)

    await drop_db(engine)
    await init_db(engine)

    yield engine

    await drop_db(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine):
    """
    Предоставляет async session для работы с тестовой БД.

    Транзакция откатывается после теста.
    """
    TestSessionLocal = make_session_factory(test_engine)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def tagging_config():
    """Конфигурация по умолчанию: untag_on_delete=True, без сборки мусора."""
    return TaggingConfig()


@pytest.fixture
def gc_config():
    """Конфигурация с удалением неиспользуемых тегов после untag."""
    return TaggingConfig(delete_unused_tags=True)


@pytest.fixture
def tagging(test_db, tagging_config):
    return TaggingService(test_db, tagging_config)


@pytest.fixture
def tag_service(test_db, tagging_config):
    return TagService(test_db, tagging_config)


@pytest.fixture
def group_service(test_db, tagging_config):
    return TagGroupService(test_db, tagging_config)


@pytest.fixture
def post_service(test_db, tagging_config):
    return PostService(test_db, tagging_config)


@pytest_asyncio.fixture
async def make_post(test_db):
    """Фабрика сохранённых постов."""

    async def _make(title: str = "Post") -> Post:
        post = Post(title=title)
        test_db.add(post)
        await test_db.flush()
        return post

    return _make


@pytest_asyncio.fixture
async def make_note(test_db):
    """Фабрика сохранённых заметок."""

    async def _make(title: str = "Note") -> Note:
        note = Note(title=title)
        test_db.add(note)
        await test_db.flush()
        return note

    return _make


@pytest_asyncio.fixture
async def test_client(test_engine):
    """
    Предоставляет HTTP клиент для тестирования API endpoints.

    Использует тестовую БД вместо production БД и передаёт X-API-Key.
    """
    TestSessionLocal = make_session_factory(test_engine)

    async def override_get_db():
        async with TestSessionLocal() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tagging_config] = lambda: TaggingConfig()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-API-Key": settings.API_KEY},
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def anyio_backend():
    """Используем asyncio для всех async тестов."""
    return "asyncio"
