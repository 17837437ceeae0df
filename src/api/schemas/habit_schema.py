"""Схемы Pydantic для модели Habit."""

from datetime import date, datetime, time

from pydantic import Field, model_validator

from src.api.models import HabitCategory, HabitFrequency

from .base_schema import BaseSchema, DayName


class HabitSchemaBase(BaseSchema):
    """Базовая схема для привычки."""

    name: str = Field(..., min_length=1, max_length=255, description="Название привычки")
    category: HabitCategory = Field(..., description="Категория привычки")
    description: str = Field("", description="Описание привычки")
    frequency: HabitFrequency = Field(HabitFrequency.DAILY, description="Периодичность (Daily / Weekly / custom)")
    custom_days: list[DayName] = Field(default_factory=list, description="Дни недели для периодичности custom")
    reminder_enabled: bool = Field(False, description="Включены ли напоминания")
    reminder_time: time | None = Field(None, description="Время напоминания (ЧЧ:ММ)")
    reminder_days: list[DayName] = Field(default_factory=list, description="Дни недели для напоминаний")


class HabitSchemaCreate(HabitSchemaBase):
    """Схема для создания новой привычки."""

    # user_id берется из JWT токена, стрики по умолчанию 0
    start_date: date | None = Field(None, description="Дата начала (по умолчанию - сегодня)")

    @model_validator(mode="after")
    def check_custom_days(self) -> "HabitSchemaCreate":
        if self.frequency == HabitFrequency.CUSTOM and not self.custom_days:
            raise ValueError("Для периодичности 'custom' укажите хотя бы один день в custom_days.")
        return self


class HabitSchemaUpdate(BaseSchema):
    """
    Схема для частичного обновления привычки.

    Все поля опциональны. current_streak и longest_streak управляются отметками выполнения.
    """

    name: str | None = Field(None, min_length=1, max_length=255, description="Новое название привычки")
    category: HabitCategory | None = Field(None, description="Новая категория")
    description: str | None = Field(None, description="Новое описание")
    frequency: HabitFrequency | None = Field(None, description="Новая периодичность")
    custom_days: list[DayName] | None = Field(None, description="Новые дни для периодичности custom")
    start_date: date | None = Field(None, description="Новая дата начала")
    reminder_enabled: bool | None = Field(None, description="Включены ли напоминания")
    reminder_time: time | None = Field(None, description="Новое время напоминания")
    reminder_days: list[DayName] | None = Field(None, description="Новые дни напоминаний")


class HabitSchemaRead(HabitSchemaBase):
    """Схема для чтения данных привычки (ответа API)."""

    id: int = Field(..., description="ID привычки")
    user_id: int = Field(..., description="ID владельца привычки")
    start_date: date = Field(..., description="Дата начала отслеживания")
    current_streak: int = Field(..., description="Текущая серия выполнений подряд")
    longest_streak: int = Field(..., description="Максимальная серия выполнений подряд")
    created_at: datetime = Field(..., description="Время создания привычки")
    updated_at: datetime = Field(..., description="Время последнего обновления привычки")
