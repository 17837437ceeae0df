"""Сервис для работы с привычками."""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import BadRequestException, ForbiddenException
from src.api.core.logging import api_log as log
from src.api.models import Habit, HabitFrequency, User
from src.api.repositories import HabitRepository
from src.api.schemas import HabitSchemaCreate, HabitSchemaUpdate

from .base_service import BaseService

# Поля, которые можно сбросить в null при обновлении
NULLABLE_HABIT_FIELDS = {"reminder_time"}


def check_habit_ownership(habit: Habit, user_id: int) -> None:
    """
    Проверяет, что привычка принадлежит пользователю.

    Raises:
        ForbiddenException: Если привычка принадлежит другому пользователю.
    """
    if habit.user_id != user_id:
        log.warning(f"Пользователь ID: {user_id} пытался получить доступ к чужой привычке ID: {habit.id}")
        raise ForbiddenException(
            message="У вас нет прав для доступа к этой привычке.",
            error_type="habit_access_forbidden",
        )


class HabitService(BaseService[Habit, HabitRepository, HabitSchemaCreate, HabitSchemaUpdate]):
    """
    Сервис для управления привычками.

    Отвечает за создание, чтение, обновление и удаление привычек
    с проверкой принадлежности текущему пользователю.
    """

    def __init__(self, habit_repository: HabitRepository):
        super().__init__(repository=habit_repository)

    async def create_habit_for_user(
        self,
        db_session: AsyncSession,
        *,
        habit_in: HabitSchemaCreate,
        current_user: User,
    ) -> Habit:
        """
        Создает новую привычку для пользователя.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_in (HabitSchemaCreate): Данные для создания привычки.
            current_user (User): Аутентифицированный пользователь.

        Returns:
            Habit: Созданная привычка.
        """
        try:
            habit = await self.repository.create_habit(db_session, habit_in=habit_in, user_id=current_user.id)
            await db_session.commit()

            log.info(f"Привычка ID {habit.id} для пользователя (ID: {current_user.id}) успешно создана.")
            return habit

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при создании привычки для пользователя ID: {current_user.id}: {exc}", exc_info=True)
            raise

    async def get_habit_by_id_for_user(self, db_session: AsyncSession, *, habit_id: int, current_user: User) -> Habit:
        """
        Получает привычку по ID с проверкой принадлежности пользователю.

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
        """
        habit = await self.get_by_id(db_session, obj_id=habit_id)
        check_habit_ownership(habit, current_user.id)
        return habit

    async def get_habits_for_user(
        self,
        db_session: AsyncSession,
        *,
        current_user: User,
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[Habit]:
        """Получает привычки текущего пользователя, сначала новые."""
        return await self.repository.get_habits_by_user_id(
            db_session,
            user_id=current_user.id,
            skip=skip,
            limit=limit,
        )

    async def update_habit_for_user(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        habit_in: HabitSchemaUpdate,
        current_user: User,
    ) -> Habit:
        """
        Частично обновляет привычку пользователя.

        Поля, переданные как null, игнорируются (кроме reminder_time).
        Итоговая периодичность custom требует непустого custom_days.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            habit_in (HabitSchemaUpdate): Данные для обновления.
            current_user (User): Аутентифицированный пользователь.

        Returns:
            Habit: Обновленная привычка.

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
            BadRequestException: Если для custom не указаны дни.
        """
        habit = await self.get_habit_by_id_for_user(db_session, habit_id=habit_id, current_user=current_user)

        update_data: dict[str, Any] = {
            field: value
            for field, value in habit_in.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_HABIT_FIELDS
        }

        frequency = update_data.get("frequency", habit.frequency)
        custom_days = update_data.get("custom_days", habit.custom_days)

        if frequency == HabitFrequency.CUSTOM and not custom_days:
            raise BadRequestException(
                message="Для периодичности 'custom' укажите хотя бы один день в custom_days.",
                error_type="custom_days_required",
                loc=["body", "custom_days"],
            )

        return await self.update(db_session, db_obj=habit, obj_in=update_data)

    async def delete_habit_for_user(self, db_session: AsyncSession, *, habit_id: int, current_user: User) -> None:
        """
        Удаляет привычку пользователя вместе с ее отметками (ON DELETE CASCADE).

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
        """
        habit = await self.get_habit_by_id_for_user(db_session, habit_id=habit_id, current_user=current_user)
        await self.delete(db_session, db_obj=habit)
