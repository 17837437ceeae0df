"""Сервис геймификации: опыт (XP), уровни, значки и ежедневное колесо наград."""

import random
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.config import settings
from src.api.core.exceptions import BadRequestException, NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import User
from src.api.repositories import HabitLogRepository, HabitRepository, UserRepository
from src.api.schemas import (
    DB_INT_MAX,
    AwardBadgeResponse,
    AwardXPResponse,
    EnableSpinResponse,
    GamificationStats,
    SpinResponse,
    SpinReward,
    UserSchemaUpdate,
)
from src.api.utils.date_utils import get_today_date_for_user
from src.api.utils.gamification_utils import calculate_level, calculate_xp_to_next_level

# Награды колеса выпадают с равной вероятностью
SPIN_REWARDS: tuple[SpinReward, ...] = (
    SpinReward(type="xp", amount=50, label="50 XP"),
    SpinReward(type="xp", amount=100, label="100 XP"),
    SpinReward(type="xp", amount=150, label="150 XP"),
    SpinReward(type="badge", id="lucky", label="Lucky Badge"),
    SpinReward(type="streak_protection", label="Streak Protection"),
)


class GamificationService:
    """
    Управляет игровым состоянием пользователя.

    XP только растет, уровень вычисляется из XP, значки не повторяются.
    Колесо можно крутить не чаще одного раза в календарный день пользователя
    и только после разблокировки (enable-spin).
    """

    def __init__(
        self,
        user_repository: UserRepository,
        habit_repository: HabitRepository,
        log_repository: HabitLogRepository,
        rng: random.Random | None = None,
    ):
        self.user_repository = user_repository
        self.habit_repository = habit_repository
        self.log_repository = log_repository
        self.rng = rng or random.Random()

    @staticmethod
    def _xp_to_next_level(user: User) -> int:
        return calculate_xp_to_next_level(user.xp, user.level, settings.XP_PER_LEVEL)

    @staticmethod
    def _add_xp(user: User, amount: int, loc: list[str] | None = None) -> int:
        """
        Возвращает новый запас XP.

        Raises:
            BadRequestException: Если сумма не помещается в колонку xp.
        """
        new_xp = user.xp + amount
        if new_xp > DB_INT_MAX:
            raise BadRequestException(
                message=f"Запас XP не может превышать {DB_INT_MAX}.", error_type="xp_limit_exceeded", loc=loc
            )
        return new_xp

    async def _save_user(self, db_session: AsyncSession, *, user: User, user_update: UserSchemaUpdate) -> User:
        """Сохраняет изменения пользователя и фиксирует транзакцию."""
        user_id = user.id

        try:
            updated_user = await self.user_repository.update(db_session, db_obj=user, obj_in=user_update)
            await db_session.commit()
            return updated_user

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при обновлении игровых данных пользователя ID: {user_id}: {exc}", exc_info=True)
            raise

    def get_stats(self, *, current_user: User) -> GamificationStats:
        """Игровая статистика пользователя."""
        return GamificationStats(
            xp=current_user.xp,
            level=current_user.level,
            xp_to_next_level=self._xp_to_next_level(current_user),
            badges=current_user.badges,
            daily_spin_available=current_user.daily_spin_available,
            last_spin_date=current_user.last_spin_date,
        )

    async def award_xp(
        self, db_session: AsyncSession, *, current_user: User, amount: int, reason: str
    ) -> AwardXPResponse:
        """
        Начисляет опыт и пересчитывает уровень.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.
            amount (int): Количество XP (больше 0).
            reason (str): За что начисляется XP.

        Returns:
            AwardXPResponse: Новые значения XP и уровня.

        Raises:
            BadRequestException: Если amount не положительный.
        """
        if amount <= 0:
            raise BadRequestException(
                message="Количество XP должно быть больше 0.", error_type="invalid_xp_amount", loc=["body", "amount"]
            )

        new_xp = self._add_xp(current_user, amount, loc=["body", "amount"])
        user = await self._save_user(
            db_session,
            user=current_user,
            user_update=UserSchemaUpdate(xp=new_xp, level=calculate_level(new_xp, settings.XP_PER_LEVEL)),
        )

        log.info(f"Пользователь ID: {user.id} получил {amount} XP ({reason}). Уровень: {user.level}")

        return AwardXPResponse(
            message=f"Earned {amount} XP for {reason}!",
            xp=user.xp,
            level=user.level,
            xp_to_next_level=self._xp_to_next_level(user),
        )

    async def award_badge(self, db_session: AsyncSession, *, current_user: User, badge_id: str) -> AwardBadgeResponse:
        """
        Выдает значок. Повторная выдача ничего не меняет.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.
            badge_id (str): Идентификатор значка.

        Returns:
            AwardBadgeResponse: Новый значок (или None) и полный список значков.
        """
        if badge_id in current_user.badges:
            return AwardBadgeResponse(message="Badge already earned", badge=None, badges=current_user.badges)

        # Новый список, а не append: изменения внутри JSON-поля SQLAlchemy не отслеживает
        user = await self._save_user(
            db_session,
            user=current_user,
            user_update=UserSchemaUpdate(badges=[*current_user.badges, badge_id]),
        )

        log.info(f"Пользователь ID: {user.id} получил значок '{badge_id}'.")
        return AwardBadgeResponse(message="New badge earned!", badge=badge_id, badges=user.badges)

    async def spin(self, db_session: AsyncSession, *, current_user: User) -> SpinResponse:
        """
        Крутит ежедневное колесо наград и применяет награду.

        Строка пользователя перечитывается с блокировкой FOR UPDATE, поэтому
        параллельный запрос ждет фиксации и видит уже записанный last_spin_date.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.

        Returns:
            SpinResponse: Выпавшая награда и новые XP, уровень и значки.

        Raises:
            NotFoundException: Если пользователь удален во время запроса.
            BadRequestException: Если колесо уже крутили сегодня, оно не разблокировано
                или награда не помещается в запас XP.
        """
        user_id = current_user.id
        locked_user = await self.user_repository.get_user_by_id_for_update(db_session, user_id=user_id)

        if locked_user is None:
            await db_session.rollback()
            raise NotFoundException(message=f"Пользователь с ID {user_id} не найден.", error_type="user_not_found")

        today = get_today_date_for_user(locked_user)

        try:
            # Второе вращение за день запрещено независимо от флага
            if locked_user.last_spin_date == today:
                raise BadRequestException(message="Already spun today!", error_type="spin_already_used")

            if not locked_user.daily_spin_available:
                raise BadRequestException(
                    message="Daily spin not available. Complete all habits first!", error_type="spin_not_available"
                )

            reward = self.rng.choice(SPIN_REWARDS)
            update_data: dict[str, Any] = {"daily_spin_available": False, "last_spin_date": today}

            if reward.type == "xp" and reward.amount:
                new_xp = self._add_xp(locked_user, reward.amount)
                update_data.update(xp=new_xp, level=calculate_level(new_xp, settings.XP_PER_LEVEL))
            elif reward.type == "badge" and reward.id and reward.id not in locked_user.badges:
                update_data["badges"] = [*locked_user.badges, reward.id]
            elif reward.type == "streak_protection":
                # TODO: защита серии пока не хранится и не влияет на расчет серий
                log.info(f"Пользователю ID: {user_id} выпала защита серии (без эффекта).")

        except BadRequestException:
            # Снимаем блокировку FOR UPDATE
            await db_session.rollback()
            raise

        user = await self._save_user(db_session, user=locked_user, user_update=UserSchemaUpdate(**update_data))

        log.info(f"Пользователь ID: {user.id} прокрутил колесо: {reward.label}.")

        return SpinResponse(
            message="Spin successful!",
            reward=reward,
            xp=user.xp,
            level=user.level,
            badges=user.badges,
        )

    async def enable_spin(self, db_session: AsyncSession, *, current_user: User) -> EnableSpinResponse:
        """
        Разблокирует колесо, если все привычки пользователя выполнены сегодня.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.

        Returns:
            EnableSpinResponse: Новое состояние флага.

        Raises:
            BadRequestException: Если привычек нет или не все выполнены сегодня.
        """
        today = get_today_date_for_user(current_user)

        habits = await self.habit_repository.get_habits_by_user_id(db_session, user_id=current_user.id)
        completed_ids = await self.log_repository.get_completed_habit_ids_for_date(
            db_session, user_id=current_user.id, check_date=today
        )
        pending = [habit.id for habit in habits if habit.id not in completed_ids]

        if not habits or pending:
            log.info(f"Колесо пользователя ID: {current_user.id} не разблокировано, невыполненные привычки: {pending}")
            raise BadRequestException(
                message="Complete all habits for today to unlock the daily spin.",
                error_type="habits_not_completed",
            )

        await self._save_user(db_session, user=current_user, user_update=UserSchemaUpdate(daily_spin_available=True))

        log.info(f"Колесо пользователя ID: {current_user.id} разблокировано.")
        return EnableSpinResponse(message="Daily spin unlocked!", daily_spin_available=True)
