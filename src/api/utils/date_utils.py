"""Модуль вспомогательных утилит для работы с датами/таймзонами."""

from datetime import date, datetime, timezone, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.api.core.logging import api_log as log

if TYPE_CHECKING:  # pragma: no cover
    from src.api.models import User


def get_user_timezone(user: "User") -> tzinfo:
    """
    Возвращает часовой пояс пользователя.

    Если часовой пояс пустой или некорректный, используется UTC.

    Args:
        user (User): Экземпляр пользователя.

    Returns:
        tzinfo: Часовой пояс пользователя.
    """
    user_timezone_str = user.timezone or "UTC"

    try:
        return ZoneInfo(user_timezone_str)
    except (ZoneInfoNotFoundError, ValueError):
        # Опечатка в таймзоне не должна ронять запрос
        log.warning(
            f"Некорректный часовой пояс '{user_timezone_str}' у пользователя ID {user.id}. "
            "Используется UTC по умолчанию."
        )
        return timezone.utc


def utc_now() -> datetime:
    """Текущий момент в UTC (в тестах подменяется)."""
    return datetime.now(timezone.utc)


def get_today_date_for_user(user: "User", now: datetime | None = None) -> date:
    """
    Вычисляет текущую дату ("сегодня") с учетом часового пояса пользователя.

    Args:
        user (User): Экземпляр пользователя.
        now (datetime | None): Момент времени (aware). По умолчанию - текущее время UTC.

    Returns:
        date: Дата "сегодня" для пользователя.
    """
    moment = now or utc_now()

    # astimezone() сохраняет абсолютный момент времени, меняя поля под смещение таймзоны
    return moment.astimezone(get_user_timezone(user)).date()
