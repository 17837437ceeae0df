"""
Эндпоинты для отметок выполнения привычек (HabitLog).
"""

from fastapi import APIRouter, Response, status

from src.api.core.dependencies import CurrentUser, DBSession, HabitIdPath, HabitLogSvc
from src.api.schemas import HabitLogCreateResponse, HabitLogSchemaCreate, HabitProgressResponse

router = APIRouter(prefix="/logs", tags=["Habit Logs"])


@router.post(
    "/",
    response_model=HabitLogCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Отметка выполнения привычки",
    description=(
        "Отмечает привычку выполненной на дату (по календарю пользователя) и пересчитывает серии. "
        "Если отметка на эту дату уже есть, возвращает ее со статусом 200 и `already_completed=true`."
    ),
)
async def create_log(
    log_in: HabitLogSchemaCreate,
    response: Response,
    db_session: DBSession,
    current_user: CurrentUser,
    log_service: HabitLogSvc,
) -> HabitLogCreateResponse:
    """
    Создает отметку выполнения.

    Args:
        log_in: ID привычки и дата.
        response: Ответ FastAPI (для смены статуса на 200 при повторной отметке).
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        log_service: Сервис отметок.

    Returns:
        HabitLogCreateResponse: Отметка, серии и флаг already_completed.
    """
    result = await log_service.record_completion(db_session, log_in=log_in, current_user=current_user)

    if result.already_completed:
        response.status_code = status.HTTP_200_OK

    return result


@router.get(
    "/{habit_id}",
    response_model=HabitProgressResponse,
    summary="История отметок и серии привычки",
)
async def get_habit_logs(
    habit_id: HabitIdPath,
    db_session: DBSession,
    current_user: CurrentUser,
    log_service: HabitLogSvc,
) -> HabitProgressResponse:
    return await log_service.get_habit_progress(db_session, habit_id=habit_id, current_user=current_user)
