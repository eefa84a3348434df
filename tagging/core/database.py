"""Database engine and session management."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings


def configure_sqlite_engine(engine: AsyncEngine) -> AsyncEngine:
    """
    Настроить SQLite: транзакции ведёт SQLAlchemy, внешние ключи включены.

    Драйвер sqlite3 сам решает, когда слать BEGIN, и SAVEPOINT
    (begin_nested) в таком режиме работает неправильно. Отключаем
    автоматику драйвера и шлём BEGIN сами.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        # ON DELETE CASCADE / SET NULL в SQLite работают только с этим PRAGMA
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def make_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Создать async engine для указанной БД.

    Для SQLite используется StaticPool (одно соединение, иначе in-memory БД теряется),
    для PostgreSQL - NullPool.
    """
    if "sqlite" in url:
        return configure_sqlite_engine(
            create_async_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        )
    return create_async_engine(url, echo=echo, poolclass=NullPool)


def make_session_factory(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = make_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
AsyncSessionLocal = make_session_factory(engine)


async def init_db(bind=None):
    """Initialize database (create all tables)."""
    from ..models import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(bind=None):
    """Drop all tables (use with caution!)."""
    from ..models import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
