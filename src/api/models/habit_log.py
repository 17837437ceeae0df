"""Модель SQLAlchemy для HabitLog (Отметка выполнения привычки)."""

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


class HabitLog(Base):
    """
    Отметка о выполнении привычки в конкретный календарный день.

    Единственный источник данных для расчета серий и статистики прогресса.

    Attributes:
        id: Первичный ключ (унаследован от Base).
        habit_id: Внешний ключ на привычку.
        user_id: Внешний ключ на владельца (для выборок прогресса по пользователю).
        date: Календарная дата отметки.
        completed: Выполнена ли привычка в этот день.
        habit: Привычка, к которой относится отметка.
    """

    __tablename__ = "habit_logs"

    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    completed: Mapped[bool] = mapped_column(default=True, nullable=False)

    # Связи
    habit: Mapped["Habit"] = relationship(back_populates="logs")

    __table_args__ = (
        # Не более одной отметки на привычку в день
        UniqueConstraint("habit_id", "date", name="uq_habit_log_per_day"),
        # Выборка выполненных отметок привычки при расчете серий
        Index("ix_habit_logs_habit_id_completed_date", "habit_id", "completed", "date"),
    )
