"""Сервис для работы с отметками выполнения привычек и сериями (стриками)."""

from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import BadRequestException, NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import Habit, HabitLog, User
from src.api.repositories import HabitLogRepository, HabitRepository
from src.api.schemas import (
    HabitLogCreateResponse,
    HabitLogSchemaCreate,
    HabitLogSchemaRead,
    HabitProgressResponse,
    StreakStats,
)
from src.api.utils.date_utils import get_today_date_for_user
from src.api.utils.streak_utils import calculate_streaks

from .base_service import BaseService
from .habit_service import check_habit_ownership


class HabitLogService(BaseService[HabitLog, HabitLogRepository, HabitLogSchemaCreate, HabitLogSchemaRead]):
    """
    Сервис для управления отметками выполнения (HabitLog).

    Отметки - единственный источник данных для серий. Поля current_streak
    и longest_streak у привычки - кэш, который пересчитывается при создании
    отметки и при запросе прогресса привычки.
    """

    def __init__(self, log_repository: HabitLogRepository, habit_repository: HabitRepository):
        super().__init__(repository=log_repository)
        self.habit_repository = habit_repository

    async def _get_owned_habit(
        self, db_session: AsyncSession, *, habit_id: int, current_user: User, for_update: bool = False
    ) -> Habit:
        """
        Получает привычку пользователя или выбрасывает исключение.

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
        """
        if for_update:
            # Блокируем строку привычки до конца транзакции, чтобы кэш серий не перезаписывался параллельно
            habit = await self.habit_repository.get_habit_by_id_for_update(db_session, habit_id=habit_id)
        else:
            habit = await self.habit_repository.get_by_id(db_session, obj_id=habit_id)

        if not habit:
            raise NotFoundException(message=f"Привычка с ID {habit_id} не найдена.", error_type="habit_not_found")

        check_habit_ownership(habit, current_user.id)
        return habit

    async def _refresh_habit_streaks(self, db_session: AsyncSession, *, habit: Habit, today: date) -> StreakStats:
        """
        Пересчитывает серии по всем выполненным отметкам и сохраняет их в привычке (без commit).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit (Habit): Привычка.
            today (date): Дата "сегодня" для владельца привычки.

        Returns:
            StreakStats: Пересчитанные серии.
        """
        completed_dates = await self.repository.get_completed_dates_for_habit(db_session, habit_id=habit.id)
        streaks = calculate_streaks(completed_dates, today)

        if (habit.current_streak, habit.longest_streak) != tuple(streaks):
            log.debug(
                f"Серии привычки ID: {habit.id}: {habit.current_streak}/{habit.longest_streak} "
                f"-> {streaks.current_streak}/{streaks.longest_streak}"
            )
            await self.habit_repository.update(db_session, db_obj=habit, obj_in=streaks._asdict())

        return StreakStats(current_streak=streaks.current_streak, longest_streak=streaks.longest_streak)

    @staticmethod
    def _existing_log_response(existing_log: HabitLog) -> HabitLogCreateResponse:
        if existing_log.completed:
            message = "Habit already marked as completed for this date"
        else:
            message = "Habit already logged as not completed for this date"

        return HabitLogCreateResponse(
            message=message,
            log=HabitLogSchemaRead.model_validate(existing_log),
            streaks=None,
            already_completed=True,
        )

    async def _complete_existing_log(
        self, db_session: AsyncSession, *, habit_log: HabitLog, habit: Habit, today: date
    ) -> HabitLogCreateResponse:
        """Переводит отметку с completed=False в выполненные и пересчитывает серии."""
        habit_id, log_date = habit.id, habit_log.date

        try:
            habit_log = await self.repository.update(db_session, db_obj=habit_log, obj_in={"completed": True})
            streaks = await self._refresh_habit_streaks(db_session, habit=habit, today=today)
            await db_session.commit()

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при выполнении отметки привычки ID: {habit_id} на {log_date}: {exc}", exc_info=True)
            raise

        log.info(f"Отметка привычки ID: {habit_id} на {log_date} переведена в выполненные.")

        return HabitLogCreateResponse(
            message="Habit marked as completed",
            log=HabitLogSchemaRead.model_validate(habit_log),
            streaks=streaks,
            already_completed=False,
        )

    async def record_completion(
        self,
        db_session: AsyncSession,
        *,
        log_in: HabitLogSchemaCreate,
        current_user: User,
    ) -> HabitLogCreateResponse:
        """
        Отмечает привычку выполненной на указанную дату.

        Повторная отметка на ту же дату не создает новую запись и возвращает
        существующую с флагом already_completed. Исключение - отметка с
        completed=False: при запросе с completed=True она становится выполненной.
        Для новой или выполненной отметки серии пересчитываются и сохраняются в привычке.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            log_in (HabitLogSchemaCreate): ID привычки и дата.
            current_user (User): Аутентифицированный пользователь.

        Returns:
            HabitLogCreateResponse: Отметка, пересчитанные серии и флаг already_completed.

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
            BadRequestException: Если дата отметки в будущем.
        """
        today = get_today_date_for_user(current_user)

        if log_in.date > today:
            raise BadRequestException(
                message="Нельзя отметить выполнение привычки на будущую дату.",
                error_type="log_date_in_future",
                loc=["body", "date"],
            )

        habit = await self._get_owned_habit(
            db_session, habit_id=log_in.habit_id, current_user=current_user, for_update=True
        )

        existing_log = await self.repository.get_log_by_habit_id_and_date(
            db_session, habit_id=habit.id, log_date=log_in.date
        )
        if existing_log and not existing_log.completed and log_in.completed:
            return await self._complete_existing_log(db_session, habit_log=existing_log, habit=habit, today=today)

        if existing_log:
            log.info(f"Привычка ID: {habit.id} уже отмечена на {log_in.date}.")
            # Ответ собираем до rollback: после него атрибуты объектов сессии истекают
            response = self._existing_log_response(existing_log)
            # Снимаем блокировку FOR UPDATE
            await db_session.rollback()
            return response

        try:
            habit_log = await self.repository.create(
                db_session,
                obj_in={
                    "habit_id": habit.id,
                    "user_id": current_user.id,
                    "date": log_in.date,
                    "completed": log_in.completed,
                },
            )
            streaks = await self._refresh_habit_streaks(db_session, habit=habit, today=today)
            await db_session.commit()

        # Параллельный запрос успел создать отметку на ту же дату (уникальный индекс habit_id + date)
        except IntegrityError:
            await db_session.rollback()
            log.warning(f"Race condition при отметке привычки ID: {log_in.habit_id} на {log_in.date}.")

            existing_log = await self.repository.get_log_by_habit_id_and_date(
                db_session, habit_id=log_in.habit_id, log_date=log_in.date
            )
            if not existing_log:
                raise
            return self._existing_log_response(existing_log)

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при отметке привычки ID: {log_in.habit_id}: {exc}", exc_info=True)
            raise

        log.info(
            f"Привычка ID: {habit_log.habit_id} отмечена на {habit_log.date}. "
            f"Серии: {streaks.current_streak}/{streaks.longest_streak}"
        )

        return HabitLogCreateResponse(
            message="Habit marked as completed",
            log=HabitLogSchemaRead.model_validate(habit_log),
            streaks=streaks,
            already_completed=False,
        )

    async def get_habit_progress(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        current_user: User,
    ) -> HabitProgressResponse:
        """
        Возвращает историю отметок привычки и пересчитанные серии.

        Кэш серий в привычке обновляется, если он разошелся с отметками.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            current_user (User): Аутентифицированный пользователь.

        Returns:
            HabitProgressResponse: Серии, количество выполнений и отметки (новые сначала).

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
        """
        today = get_today_date_for_user(current_user)
        habit = await self._get_owned_habit(db_session, habit_id=habit_id, current_user=current_user, for_update=True)

        try:
            streaks = await self._refresh_habit_streaks(db_session, habit=habit, today=today)
            logs = await self.repository.get_logs_for_habit(db_session, habit_id=habit.id)
            await db_session.commit()

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при получении прогресса привычки ID: {habit_id}: {exc}", exc_info=True)
            raise

        return HabitProgressResponse(
            habit_id=habit.id,
            habit_name=habit.name,
            frequency=habit.frequency,
            current_streak=streaks.current_streak,
            longest_streak=streaks.longest_streak,
            total_completed=sum(1 for habit_log in logs if habit_log.completed),
            logs=[HabitLogSchemaRead.model_validate(habit_log) for habit_log in logs],
        )
