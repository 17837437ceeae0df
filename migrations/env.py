"""Окружение Alembic: метаданные моделей, URL базы данных и логирование через Loguru."""

from alembic import context
from sqlalchemy import engine_from_config, pool

# Импорт пакета моделей регистрирует все таблицы в метаданных
from src.api.models import Base
from src.core_shared.logging_setup import LogConfig, intercept_standard_logging, setup_logger

logger = setup_logger("Alembic", log_config=LogConfig(enable_file_logging=False))

# Логи alembic и SQLAlchemy (стандартный logging) перенаправляем в Loguru
intercept_standard_logging(service_name="Alembic")

config = context.config

target_metadata = Base.metadata


def get_database_url() -> str:
    """
    Возвращает URL базы данных.

    Явно заданный `sqlalchemy.url` (например, в тестах) имеет приоритет
    над настройками приложения.
    """
    configured_url = config.get_main_option("sqlalchemy.url")

    if configured_url:
        return configured_url

    # Настройки читаются только здесь: для явного URL переменные окружения приложения не нужны
    from src.api.core.config import settings

    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    """Генерирует SQL миграций без подключения к базе данных."""
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Применяет миграции через синхронное подключение к базе данных."""
    connectable_config = config.get_section(config.config_ini_section, {})
    connectable_config["sqlalchemy.url"] = get_database_url()

    connectable = engine_from_config(
        connectable_config,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()
    logger.info("Миграции применены.")


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
