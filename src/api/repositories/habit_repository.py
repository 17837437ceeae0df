"""Репозиторий для работы с моделью Habit."""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import Habit
from src.api.repositories.base_repository import BaseRepository
from src.api.schemas import HabitSchemaCreate, HabitSchemaUpdate


class HabitRepository(BaseRepository[Habit, HabitSchemaCreate, HabitSchemaUpdate]):
    """
    Репозиторий для выполнения CRUD-операций с моделью Habit.

    Наследует общие методы от BaseRepository и содержит специфичные для Habit методы.
    """

    async def create_habit(
        self,
        db_session: AsyncSession,
        *,
        habit_in: HabitSchemaCreate,
        user_id: int,
    ) -> Habit:
        """
        Создает новую привычку для указанного пользователя.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_in (HabitSchemaCreate): Данные для создания привычки.
            user_id (int): ID владельца привычки.

        Returns:
            Habit: Созданная привычка.
        """
        habit_data: dict[str, Any] = habit_in.model_dump()

        # Без явной даты начала используется значение по умолчанию из модели
        if habit_data.get("start_date") is None:
            habit_data.pop("start_date", None)

        return await self.create(db_session, obj_in={**habit_data, "user_id": user_id})

    async def get_habit_by_id_for_update(self, db_session: AsyncSession, *, habit_id: int) -> Habit | None:
        """
        Получает привычку по ID и блокирует строку до конца транзакции (SELECT ... FOR UPDATE).

        Используется при пересчете кэшированных серий, чтобы параллельные отметки
        не перезаписывали результаты друг друга.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.

        Returns:
            Habit | None: Экземпляр привычки или None.
        """
        statement = (
            select(self.model).where(self.model.id == habit_id).with_for_update().execution_options(populate_existing=True)
        )
        result = await db_session.execute(statement)
        habit = result.scalar_one_or_none()

        status = "найдена" if habit else "не найдена"
        log.debug(f"Привычка (ID {habit_id}) для обновления {status}.")

        return habit

    async def get_habits_by_user_id(
        self,
        db_session: AsyncSession,
        *,
        user_id: int,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Habit]:
        """
        Получает привычки пользователя, сначала новые.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID пользователя.
            skip (int): Количество записей для пропуска.
            limit (int | None): Максимальное количество записей.

        Returns:
            Sequence[Habit]: Список привычек пользователя.
        """
        habits = await self.get_multi_by_filter(
            db_session,
            self.model.user_id == user_id,
            skip=skip,
            limit=limit,
            order_by=[self.model.created_at.desc(), self.model.id.desc()],
        )

        log.debug(f"Найдено {len(habits)} привычек для пользователя ID: {user_id}.")
        return habits

    async def count_habits_by_user_id(self, db_session: AsyncSession, *, user_id: int) -> int:
        """Возвращает количество привычек пользователя."""
        return await self.count_by_filter(db_session, self.model.user_id == user_id)
