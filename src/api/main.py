"""Точка входа HabitQuest API: `uvicorn src.api.main:app`."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware

from src.api.core.config import settings
from src.api.core.database import db, ping_database
from src.api.core.dependencies import DBSession
from src.api.core.exceptions import setup_exception_handlers
from src.api.core.logging import api_log as log
from src.api.routes import api_router
from src.core_shared.logging_setup import intercept_standard_logging
from src.core_shared.sentry_sdk_setup import setup_sentry

# Логи uvicorn и SQLAlchemy идут через Loguru
intercept_standard_logging(service_name="API")

if settings.SENTRY_DSN:
    setup_sentry(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # pragma: no cover
    """Подключает базу данных на время работы приложения."""
    log.info(f"Запуск {settings.PROJECT_NAME} {settings.API_VERSION} (DEVELOPMENT={settings.DEVELOPMENT})")
    try:
        await db.connect()
        yield
    except Exception as exc:
        log.critical(f"API не запущен: {exc}", exc_info=True)
        raise
    finally:
        await db.disconnect()
        log.info("API остановлен.")


async def health_check(response: Response, db_session: DBSession) -> dict[str, Any]:
    """
    Состояние API и базы данных.

    Args:
        response (Response): Ответ, в котором выставляется 503 при недоступной базе.
        db_session (DBSession): Сессия БД.

    Returns:
        dict: `api_status` и статусы зависимостей.
    """
    database_ok = await ping_database(db_session)

    if not database_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        log.warning("Healthcheck: база данных не отвечает.")

    return {
        "api_status": "ok",
        "dependencies": {"database": "ok" if database_ok else "error"},
    }


def create_app() -> FastAPI:
    """
    Собирает приложение: CORS, обработчики ошибок, роутеры `/api` и `/healthcheck`.

    Returns:
        FastAPI: Готовое приложение.
    """
    # debug=False: иначе Starlette покажет свою страницу ошибки вместо обработчика 500
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.API_VERSION,
        description="Привычки, серии выполнений, статистика прогресса и геймификация",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    app.add_api_route(
        "/healthcheck",
        health_check,
        methods=["GET"],
        tags=["Health Check"],
        summary="Доступность API и базы данных",
        description="HTTP 503, если база данных не отвечает.",
    )

    log.debug(f"Приложение собрано, CORS: {settings.CORS_ORIGINS}")
    return app


app = create_app()
