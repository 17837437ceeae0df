"""Схемы Pydantic для модели HabitLog."""

import datetime
from typing import Any

from pydantic import Field, field_validator

from src.api.models import HabitFrequency

from .base_schema import DB_INT_MAX, BaseSchema


class StreakStats(BaseSchema):
    """Текущая и максимальная серия выполнений привычки."""

    current_streak: int = Field(0, ge=0, description="Дней подряд, заканчивая сегодняшним")
    longest_streak: int = Field(0, ge=0, description="Максимальная серия дней подряд")


class HabitLogSchemaCreate(BaseSchema):
    """Схема для отметки выполнения привычки на дату."""

    habit_id: int = Field(..., gt=0, le=DB_INT_MAX, description="ID привычки")
    date: datetime.date = Field(..., description="Дата выполнения (YYYY-MM-DD, время отбрасывается)")
    completed: bool = Field(True, description="Выполнена ли привычка")

    @field_validator("date", mode="before")
    @classmethod
    def strip_time_part(cls, value: Any) -> Any:
        # Принимаем и ISO datetime ("2024-05-01T10:00:00Z"), берем только дату
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value


class HabitLogSchemaRead(BaseSchema):
    """Схема для чтения отметки выполнения (ответа API)."""

    id: int = Field(..., description="ID отметки")
    habit_id: int = Field(..., description="ID привычки")
    user_id: int = Field(..., description="ID владельца")
    date: datetime.date = Field(..., description="Дата выполнения")
    completed: bool = Field(..., description="Выполнена ли привычка")
    created_at: datetime.datetime = Field(..., description="Время создания отметки")


class HabitLogCreateResponse(BaseSchema):
    """Результат отметки выполнения."""

    message: str = Field(..., description="Сообщение для пользователя")
    log: HabitLogSchemaRead = Field(..., description="Созданная или уже существующая отметка")
    streaks: StreakStats | None = Field(None, description="Пересчитанные серии (только для новой отметки)")
    already_completed: bool = Field(..., description="Отметка на эту дату уже существовала")


class HabitProgressResponse(BaseSchema):
    """Прогресс по одной привычке: серии и история отметок."""

    habit_id: int = Field(..., description="ID привычки")
    habit_name: str = Field(..., description="Название привычки")
    frequency: HabitFrequency = Field(..., description="Периодичность привычки")
    current_streak: int = Field(..., description="Текущая серия")
    longest_streak: int = Field(..., description="Максимальная серия")
    total_completed: int = Field(..., description="Всего выполненных отметок")
    logs: list[HabitLogSchemaRead] = Field(default_factory=list, description="Отметки (новые сначала)")
