"""Async SQLAlchemy: движок, фабрика сессий и зависимость FastAPI."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings
from .logging import api_log as log


async def ping_database(db_session: AsyncSession) -> bool:
    """Возвращает True, если база отвечает на `SELECT 1`."""
    try:
        await db_session.execute(text("SELECT 1"))
    except Exception as exc:
        log.warning(f"База данных недоступна: {exc}")
        return False
    return True


class Database:
    """
    Держит движок и фабрику сессий на время жизни приложения.

    `connect` вызывается в lifespan при старте, `disconnect` при остановке.
    """

    def __init__(self) -> None:
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self, database_url: str | None = None, **engine_kwargs: Any) -> None:
        """
        Создает движок и проверяет, что база доступна.

        Args:
            database_url (str | None): URL подключения, по умолчанию `settings.DATABASE_URL`.
            **engine_kwargs: Параметры, передаваемые в create_async_engine.

        Raises:
            RuntimeError: Если база не ответила на проверочный запрос.
        """
        self.engine = create_async_engine(
            database_url or settings.DATABASE_URL,
            echo=settings.DEVELOPMENT,
            pool_pre_ping=True,
            pool_recycle=3600,
            **engine_kwargs,
        )
        # flush выполняют репозитории, commit - сервисы
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        async with self.session_factory() as check_session:
            if not await ping_database(check_session):
                log.critical("Не удалось подключиться к базе данных при старте API.")
                raise RuntimeError("База данных недоступна.")

        log.success("База данных подключена.")

    async def disconnect(self) -> None:
        """Освобождает пул соединений."""
        if self.engine is None:
            return

        log.info("Отключение от базы данных...")
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Открывает сессию и откатывает ее, если внутри блока возникла ошибка.

        Raises:
            RuntimeError: Если `connect` еще не вызывался.
        """
        if self.session_factory is None:
            raise RuntimeError("Сессия запрошена до вызова `await db.connect()`.")

        session = self.session_factory()
        try:
            yield session
        except Exception as exc:
            log.debug(f"Откат сессии после ошибки: {exc}")
            await session.rollback()
            raise
        finally:
            await session.close()


db = Database()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Сессия на один запрос."""
    async with db.session() as session:
        yield session
