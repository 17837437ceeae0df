"""Модель SQLAlchemy для Habit (Привычка)."""

from datetime import date, time
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Date, ForeignKey, Integer, String, Text, Time
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit_log import HabitLog
    from .user import User


class HabitCategory(str, PyEnum):
    """Категории привычек."""

    HEALTH = "Health"
    LEARNING = "Learning"
    WORK = "Work"
    PERSONAL = "Personal"
    FITNESS = "Fitness"


class HabitFrequency(str, PyEnum):
    """Периодичность привычки."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    CUSTOM = "custom"


def _enum_values(enum: type[PyEnum]) -> list[str]:
    # В БД храним значения ("Health"), а не имена ("HEALTH")
    return [item.value for item in enum]


class Habit(Base):
    """
    Представляет привычку пользователя.

    Attributes:
        id: Первичный ключ (унаследован от Base).
        user_id: Внешний ключ на владельца привычки.
        name: Название привычки.
        category: Категория привычки.
        description: Описание (по умолчанию пустая строка).
        frequency: Периодичность (Daily / Weekly / custom).
        custom_days: Дни недели для периодичности custom (["Mon", "Wed"]).
        start_date: Дата начала отслеживания.
        current_streak: Кэш текущей серии, пересчитывается из HabitLog.
        longest_streak: Кэш максимальной серии, пересчитывается из HabitLog.
        reminder_enabled: Включены ли напоминания.
        reminder_time: Время напоминания (ЧЧ:ММ).
        reminder_days: Дни недели для напоминаний.
        user: Владелец привычки.
        logs: Отметки выполнения привычки.
    """

    __tablename__ = "habits"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[HabitCategory] = mapped_column(
        SqlEnum(HabitCategory, name="habit_category_enum", values_callable=_enum_values),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    frequency: Mapped[HabitFrequency] = mapped_column(
        SqlEnum(HabitFrequency, name="habit_frequency_enum", values_callable=_enum_values),
        default=HabitFrequency.DAILY,
        nullable=False,
    )
    custom_days: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    reminder_enabled: Mapped[bool] = mapped_column(default=False, nullable=False)
    reminder_time: Mapped[time | None] = mapped_column(Time(timezone=False))
    reminder_days: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    # Связи (удаление логов выполняет БД через ON DELETE CASCADE)
    user: Mapped["User"] = relationship(back_populates="habits")
    logs: Mapped[list["HabitLog"]] = relationship(
        back_populates="habit", cascade="all", passive_deletes=True
    )
