"""Сервис статистики прогресса: неделя, месяц и данные календаря."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import User
from src.api.repositories import HabitLogRepository, HabitRepository
from src.api.schemas import (
    CalendarResponse,
    HabitLogSchemaRead,
    HabitSchemaRead,
    MonthDayProgress,
    MonthlyInsights,
    MonthlyProgressResponse,
    WeekChunkProgress,
    WeekDayProgress,
    WeeklyInsights,
    WeeklyProgressResponse,
)
from src.api.utils.date_utils import get_today_date_for_user
from src.api.utils.progress_utils import (
    WEEKDAY_NAMES,
    count_completions_by_date,
    get_month_bounds,
    get_month_name,
    get_week_bounds,
    iter_days,
    monthly_consistency,
    rounded_percentage,
    split_into_weeks,
    weekly_consistency,
)

NO_HABITS_MESSAGE = "No habits created yet"


class ProgressService:
    """
    Агрегирует выполненные отметки пользователя по дням, неделям и месяцам.

    Только чтение, транзакции не открываются.
    """

    def __init__(self, habit_repository: HabitRepository, log_repository: HabitLogRepository):
        self.habit_repository = habit_repository
        self.log_repository = log_repository

    async def _count_completions(
        self, db_session: AsyncSession, *, user_id: int, start_date: date, end_date: date
    ) -> tuple[dict[date, int], int]:
        """Возвращает выполнения по датам и их общее количество в диапазоне."""
        logs = await self.log_repository.get_completed_logs_for_user_in_range(
            db_session, user_id=user_id, start_date=start_date, end_date=end_date
        )
        return count_completions_by_date(habit_log.date for habit_log in logs), len(logs)

    async def get_weekly_progress(
        self, db_session: AsyncSession, *, current_user: User, today: date | None = None
    ) -> WeeklyProgressResponse:
        """
        Статистика за текущую неделю (понедельник - воскресенье).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.
            today (date | None): Дата "сегодня". По умолчанию вычисляется по часовому поясу пользователя.

        Returns:
            WeeklyProgressResponse: Выполнения по дням, итоги и оценка регулярности.
        """
        today = today or get_today_date_for_user(current_user)
        week_start, week_end = get_week_bounds(today)

        total_habits = await self.habit_repository.count_habits_by_user_id(db_session, user_id=current_user.id)

        if total_habits == 0:
            return WeeklyProgressResponse(
                week_start=week_start,
                week_end=week_end,
                total_habits=0,
                days_active=0,
                total_completions=0,
                completion_percentage=0,
                message=NO_HABITS_MESSAGE,
            )

        completions_by_date, total_completions = await self._count_completions(
            db_session, user_id=current_user.id, start_date=week_start, end_date=week_end
        )

        daily_data = [
            WeekDayProgress(
                day=WEEKDAY_NAMES[day.weekday()],
                date=day,
                completions=completions_by_date.get(day, 0),
                percentage=rounded_percentage(completions_by_date.get(day, 0), total_habits),
            )
            for day in iter_days(week_start, week_end)
        ]

        days_active = sum(1 for day in daily_data if day.completions > 0)

        # max() возвращает первый из равных, лучший день при равенстве - более ранний
        best_day = max(daily_data, key=lambda day: day.completions)

        log.debug(
            f"Недельный прогресс пользователя ID: {current_user.id}: {total_completions} выполнений, "
            f"{days_active} активных дней."
        )

        return WeeklyProgressResponse(
            week_start=week_start,
            week_end=week_end,
            total_habits=total_habits,
            days_active=days_active,
            total_completions=total_completions,
            completion_percentage=rounded_percentage(total_completions, total_habits * len(daily_data)),
            daily_data=daily_data,
            insights=WeeklyInsights(best_day=best_day, consistency=weekly_consistency(days_active)),
        )

    async def get_monthly_progress(
        self, db_session: AsyncSession, *, current_user: User, today: date | None = None
    ) -> MonthlyProgressResponse:
        """
        Статистика за текущий календарный месяц.

        Кроме дней месяц делится на недели по 7 дней начиная с 1-го числа
        (последняя неделя может быть короче).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.
            today (date | None): Дата "сегодня". По умолчанию вычисляется по часовому поясу пользователя.

        Returns:
            MonthlyProgressResponse: Выполнения по дням и неделям, итоги и лучшая неделя.
        """
        today = today or get_today_date_for_user(current_user)
        month_start, month_end = get_month_bounds(today.year, today.month)
        month_name = get_month_name(today.month)

        total_habits = await self.habit_repository.count_habits_by_user_id(db_session, user_id=current_user.id)

        if total_habits == 0:
            return MonthlyProgressResponse(
                month_start=month_start,
                month_end=month_end,
                month_name=month_name,
                total_habits=0,
                days_active=0,
                total_completions=0,
                completion_percentage=0,
                message=NO_HABITS_MESSAGE,
            )

        completions_by_date, total_completions = await self._count_completions(
            db_session, user_id=current_user.id, start_date=month_start, end_date=month_end
        )

        daily_data = [
            MonthDayProgress(
                day=day.day,
                date=day,
                completions=completions_by_date.get(day, 0),
                percentage=rounded_percentage(completions_by_date.get(day, 0), total_habits),
            )
            for day in iter_days(month_start, month_end)
        ]

        weekly_data = [
            WeekChunkProgress(**week)
            for week in split_into_weeks([day.completions for day in daily_data], total_habits)
        ]

        days_active = sum(1 for day in daily_data if day.completions > 0)
        completion_percentage = rounded_percentage(total_completions, total_habits * len(daily_data))
        best_week = max(weekly_data, key=lambda week: week.percentage)

        return MonthlyProgressResponse(
            month_start=month_start,
            month_end=month_end,
            month_name=month_name,
            total_habits=total_habits,
            days_active=days_active,
            total_completions=total_completions,
            completion_percentage=completion_percentage,
            daily_data=daily_data,
            weekly_data=weekly_data,
            insights=MonthlyInsights(
                best_week=f"Week {best_week.week}",
                best_week_percentage=best_week.percentage,
                consistency=monthly_consistency(completion_percentage),
            ),
        )

    async def get_calendar_data(
        self,
        db_session: AsyncSession,
        *,
        current_user: User,
        year: int | None = None,
        month: int | None = None,
    ) -> CalendarResponse:
        """
        Привычки пользователя и выполненные отметки за месяц (по умолчанию - текущий).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            current_user (User): Аутентифицированный пользователь.
            year (int | None): Год.
            month (int | None): Месяц (1-12).

        Returns:
            CalendarResponse: Привычки и отметки месяца.
        """
        today = get_today_date_for_user(current_user)
        year = year or today.year
        month = month or today.month

        month_start, month_end = get_month_bounds(year, month)

        habits = await self.habit_repository.get_habits_by_user_id(db_session, user_id=current_user.id)
        logs = await self.log_repository.get_completed_logs_for_user_in_range(
            db_session, user_id=current_user.id, start_date=month_start, end_date=month_end
        )

        return CalendarResponse(
            year=year,
            month=month,
            month_name=get_month_name(month),
            habits=[HabitSchemaRead.model_validate(habit) for habit in habits],
            logs=[HabitLogSchemaRead.model_validate(habit_log) for habit_log in logs],
        )
