"""Базовые конфигурации и схемы для Pydantic."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

# Короткие названия дней недели (используются в custom_days и reminder_days)
DayName = Literal["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Верхняя граница колонок Integer (32 бита) для ID и счетчиков
DB_INT_MAX = 2**31 - 1


class BaseSchema(BaseModel):
    """Базовая схема Pydantic с общей конфигурацией."""

    model_config = ConfigDict(
        from_attributes=True,  # Позволяет создавать схемы из ORM моделей
        populate_by_name=True,
        str_strip_whitespace=True,  # Обрезаем пробелы по краям строк
        extra="ignore",  # Игнорировать лишние поля при парсинге
    )
