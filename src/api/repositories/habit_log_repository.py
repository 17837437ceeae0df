"""Репозиторий для работы с моделью HabitLog."""

from datetime import date
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import HabitLog
from src.api.repositories.base_repository import BaseRepository
from src.api.schemas import HabitLogSchemaCreate, HabitLogSchemaRead


class HabitLogRepository(BaseRepository[HabitLog, HabitLogSchemaCreate, HabitLogSchemaRead]):
    """
    Репозиторий для выполнения CRUD-операций с моделью HabitLog.

    Наследует общие методы от BaseRepository и содержит выборки для серий и статистики.
    """

    async def get_log_by_habit_id_and_date(
        self, db_session: AsyncSession, *, habit_id: int, log_date: date
    ) -> HabitLog | None:
        """
        Получает отметку привычки за конкретную дату.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            log_date (date): Дата отметки.

        Returns:
            HabitLog | None: Экземпляр отметки или None.
        """
        habit_log = await self.get_by_filter_first_or_none(
            db_session,
            self.model.habit_id == habit_id,
            self.model.date == log_date,
        )

        status = f"найдена (ID: {habit_log.id})" if habit_log else "не найдена"
        log.debug(f"Отметка привычки ID: {habit_id} на {log_date} {status}.")

        return habit_log

    async def get_completed_dates_for_habit(self, db_session: AsyncSession, *, habit_id: int) -> list[date]:
        """
        Возвращает даты всех выполненных отметок привычки (по убыванию).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.

        Returns:
            list[date]: Даты выполненных отметок.
        """
        statement = (
            select(self.model.date)
            .where(self.model.habit_id == habit_id, self.model.completed.is_(True))
            .order_by(self.model.date.desc())
        )
        result = await db_session.execute(statement)
        return list(result.scalars().all())

    async def get_logs_for_habit(self, db_session: AsyncSession, *, habit_id: int) -> Sequence[HabitLog]:
        """Возвращает все отметки привычки, сначала последние."""
        return await self.get_multi_by_filter(
            db_session,
            self.model.habit_id == habit_id,
            order_by=[self.model.date.desc()],
        )

    async def get_completed_logs_for_user_in_range(
        self, db_session: AsyncSession, *, user_id: int, start_date: date, end_date: date
    ) -> Sequence[HabitLog]:
        """
        Возвращает выполненные отметки пользователя в диапазоне дат (включительно).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID пользователя.
            start_date (date): Начало диапазона.
            end_date (date): Конец диапазона.

        Returns:
            Sequence[HabitLog]: Отметки, отсортированные по дате.
        """
        logs = await self.get_multi_by_filter(
            db_session,
            self.model.user_id == user_id,
            self.model.completed.is_(True),
            self.model.date >= start_date,
            self.model.date <= end_date,
            order_by=[self.model.date.asc(), self.model.id.asc()],
        )

        log.debug(f"Найдено {len(logs)} выполненных отметок пользователя ID: {user_id} за {start_date}..{end_date}.")
        return logs

    async def get_completed_habit_ids_for_date(
        self, db_session: AsyncSession, *, user_id: int, check_date: date
    ) -> set[int]:
        """
        Возвращает множество ID привычек пользователя, выполненных в указанную дату.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID пользователя.
            check_date (date): Дата проверки.

        Returns:
            set[int]: Множество ID привычек.
        """
        statement = select(self.model.habit_id).where(
            self.model.user_id == user_id,
            self.model.date == check_date,
            self.model.completed.is_(True),
        )
        result = await db_session.execute(statement)

        # Множество для быстрой проверки вхождения
        return set(result.scalars().all())
