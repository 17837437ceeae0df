"""Схемы Pydantic для статистики прогресса."""

import datetime

from pydantic import Field

from .base_schema import BaseSchema
from .habit_log_schema import HabitLogSchemaRead
from .habit_schema import HabitSchemaRead


class DayProgress(BaseSchema):
    """Выполнения за один день диапазона."""

    date: datetime.date = Field(..., description="Дата")
    completions: int = Field(..., description="Количество выполненных привычек за день")
    percentage: int = Field(..., description="Процент выполненных привычек за день")


class WeekDayProgress(DayProgress):
    """День недели в недельной статистике."""

    day: str = Field(..., description="Короткое название дня недели (Mon..Sun)")


class MonthDayProgress(DayProgress):
    """День месяца в месячной статистике."""

    day: int = Field(..., description="Номер дня месяца")


class WeekChunkProgress(BaseSchema):
    """Неделя месяца (последовательные 7 дней начиная с 1-го числа)."""

    week: int = Field(..., description="Номер недели в месяце")
    completions: int = Field(..., description="Выполнения за неделю")
    percentage: int = Field(..., description="Процент выполнения за неделю")
    days: int = Field(..., description="Количество дней в неделе (последняя может быть короче)")


class WeeklyInsights(BaseSchema):
    best_day: WeekDayProgress = Field(..., description="Первый день с максимумом выполнений")
    consistency: str = Field(..., description="Оценка регулярности")


class MonthlyInsights(BaseSchema):
    best_week: str = Field(..., description="Лучшая неделя ('Week N')")
    best_week_percentage: int = Field(..., description="Процент выполнения лучшей недели")
    consistency: str = Field(..., description="Оценка регулярности")


class ProgressSummary(BaseSchema):
    """Общие поля недельной и месячной статистики."""

    total_habits: int = Field(..., description="Количество привычек пользователя")
    days_active: int = Field(..., description="Дней хотя бы с одним выполнением")
    total_completions: int = Field(..., description="Всего выполнений в диапазоне")
    completion_percentage: int = Field(..., description="Процент выполнения за весь диапазон")
    message: str | None = Field(None, description="Пояснение (например, если привычек нет)")


class WeeklyProgressResponse(ProgressSummary):
    """Статистика за текущую неделю (Пн-Вс)."""

    week_start: datetime.date = Field(..., description="Понедельник текущей недели")
    week_end: datetime.date = Field(..., description="Воскресенье текущей недели")
    daily_data: list[WeekDayProgress] = Field(default_factory=list)
    insights: WeeklyInsights | None = None


class MonthlyProgressResponse(ProgressSummary):
    """Статистика за текущий календарный месяц."""

    month_start: datetime.date = Field(..., description="Первый день месяца")
    month_end: datetime.date = Field(..., description="Последний день месяца")
    month_name: str = Field(..., description="Название месяца")
    daily_data: list[MonthDayProgress] = Field(default_factory=list)
    weekly_data: list[WeekChunkProgress] = Field(default_factory=list)
    insights: MonthlyInsights | None = None


class CalendarResponse(BaseSchema):
    """Привычки и выполненные отметки за месяц для календаря."""

    year: int
    month: int
    month_name: str
    habits: list[HabitSchemaRead] = Field(default_factory=list)
    logs: list[HabitLogSchemaRead] = Field(default_factory=list)
