"""Настройка Sentry SDK."""

from logging import ERROR, INFO
from typing import Any, Protocol

from loguru import logger
from sentry_sdk import init as sentry_init
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration


class SentrySettingsProtocol(Protocol):
    """Протокол для объекта настроек, используемых Sentry."""

    SENTRY_DSN: str | None
    PRODUCTION: bool
    PROJECT_NAME: str
    API_VERSION: str


def build_sentry_options(settings: SentrySettingsProtocol) -> dict[str, Any] | None:
    """
    Формирует параметры инициализации Sentry SDK (без интеграций).

    Args:
        settings (SentrySettingsProtocol): Объект настроек.

    Returns:
        dict[str, Any] | None: Параметры для `sentry_sdk.init` или None, если DSN не задан.
    """
    if not settings.SENTRY_DSN:
        return None

    environment = "production" if settings.PRODUCTION else "development"

    # 10% трейсов и профилей в продакшене, 100% в разработке
    sample_rate = 0.1 if settings.PRODUCTION else 1.0

    return {
        "dsn": settings.SENTRY_DSN,
        "environment": environment,
        "traces_sample_rate": sample_rate,
        "profiles_sample_rate": sample_rate,
        "release": f"{settings.PROJECT_NAME}@{settings.API_VERSION}",
    }


def setup_sentry(settings: SentrySettingsProtocol) -> bool:
    """
    Инициализирует Sentry SDK, если задан DSN.

    Args:
        settings (SentrySettingsProtocol): Объект настроек.

    Returns:
        bool: True, если Sentry SDK был инициализирован.
    """
    # Используем уже настроенные обработчики, только помечаем записи именем сервиса
    sentry_log = logger.bind(service_name="SentrySetup")

    options = build_sentry_options(settings)

    if options is None:
        sentry_log.info("SENTRY_DSN не установлен, Sentry SDK не будет инициализирован.")
        return False

    sentry_log.info(
        f"Инициализация Sentry SDK. DSN: {'***' + options['dsn'][-6:]}, "
        f"Environment: {options['environment']}, "
        f"Traces Rate: {options['traces_sample_rate']}"
    )

    try:
        sentry_init(
            integrations=[
                StarletteIntegration(transaction_style="endpoint"),
                FastApiIntegration(transaction_style="endpoint"),
                SqlalchemyIntegration(),
                # breadcrumbs с INFO, события с ERROR
                LoguruIntegration(level=INFO, event_level=ERROR),
            ],
            **options,
        )
    except Exception as exc:
        # Мониторинг не должен мешать запуску API
        sentry_log.exception(f"Ошибка инициализации Sentry SDK: {exc}")
        return False

    sentry_log.info("Sentry SDK успешно инициализирован.")
    return True
