"""
Эндпоинты статистики прогресса.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from src.api.core.dependencies import CurrentUser, DBSession, ProgressSvc
from src.api.schemas import CalendarResponse, MonthlyProgressResponse, WeeklyProgressResponse

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get(
    "/weekly",
    response_model=WeeklyProgressResponse,
    summary="Прогресс за текущую неделю",
    description="Выполнения по дням недели (Пн-Вс), общий процент и оценка регулярности.",
)
async def get_weekly_progress(
    db_session: DBSession, current_user: CurrentUser, progress_service: ProgressSvc
) -> WeeklyProgressResponse:
    return await progress_service.get_weekly_progress(db_session, current_user=current_user)


@router.get(
    "/monthly",
    response_model=MonthlyProgressResponse,
    summary="Прогресс за текущий месяц",
    description="Выполнения по дням и по неделям месяца, лучшая неделя и оценка регулярности.",
)
async def get_monthly_progress(
    db_session: DBSession, current_user: CurrentUser, progress_service: ProgressSvc
) -> MonthlyProgressResponse:
    return await progress_service.get_monthly_progress(db_session, current_user=current_user)


@router.get(
    "/calendar",
    response_model=CalendarResponse,
    summary="Данные для календаря",
    description="Привычки пользователя и выполненные отметки за месяц (по умолчанию - текущий).",
)
async def get_calendar(
    db_session: DBSession,
    current_user: CurrentUser,
    progress_service: ProgressSvc,
    year: Annotated[int | None, Query(ge=1, le=9999, description="Год")] = None,
    month: Annotated[int | None, Query(ge=1, le=12, description="Месяц (1-12)")] = None,
) -> CalendarResponse:
    return await progress_service.get_calendar_data(db_session, current_user=current_user, year=year, month=month)
