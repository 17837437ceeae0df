"""
Эндпоинты для управления привычками (Habits).
"""

from typing import Sequence

from fastapi import APIRouter, Response, status

from src.api.core.dependencies import CurrentUser, DBSession, HabitIdPath, HabitSvc
from src.api.models import Habit
from src.api.schemas import HabitSchemaCreate, HabitSchemaRead, HabitSchemaUpdate

router = APIRouter(prefix="/habits", tags=["Habits"])


@router.post(
    "/",
    response_model=HabitSchemaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Создание новой привычки",
    description="Создает новую привычку для текущего пользователя. Серии начинаются с 0.",
)
async def create_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_in: HabitSchemaCreate,
) -> Habit:
    """
    Создает новую привычку для текущего пользователя.

    Args:
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        habit_service: Сервис для работы с привычками.
        habit_in: Данные привычки (название, категория, периодичность, напоминания).

    Returns:
        Habit: Созданный объект привычки.
    """
    return await habit_service.create_habit_for_user(db_session, habit_in=habit_in, current_user=current_user)


@router.get(
    "/",
    response_model=Sequence[HabitSchemaRead],
    summary="Получение списка привычек пользователя",
    description="Возвращает все привычки текущего пользователя, сначала новые.",
)
async def get_habits(db_session: DBSession, current_user: CurrentUser, habit_service: HabitSvc) -> Sequence[Habit]:
    return await habit_service.get_habits_for_user(db_session, current_user=current_user)


@router.get(
    "/{habit_id}",
    response_model=HabitSchemaRead,
    summary="Получение привычки по ID",
)
async def get_habit(
    habit_id: HabitIdPath, db_session: DBSession, current_user: CurrentUser, habit_service: HabitSvc
) -> Habit:
    """
    Возвращает привычку текущего пользователя.

    Raises:
        NotFoundException: Привычка не найдена.
        ForbiddenException: Привычка принадлежит другому пользователю.
    """
    return await habit_service.get_habit_by_id_for_user(db_session, habit_id=habit_id, current_user=current_user)


@router.put(
    "/{habit_id}",
    response_model=HabitSchemaRead,
    summary="Обновление привычки",
    description="Частичное обновление: изменяются только переданные поля.",
)
async def update_habit(
    habit_id: HabitIdPath,
    habit_in: HabitSchemaUpdate,
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
) -> Habit:
    """
    Обновляет привычку текущего пользователя.

    Args:
        habit_id: ID привычки.
        habit_in: Поля для обновления.
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        habit_service: Сервис для работы с привычками.

    Returns:
        Habit: Обновленная привычка.
    """
    return await habit_service.update_habit_for_user(
        db_session, habit_id=habit_id, habit_in=habit_in, current_user=current_user
    )


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удаление привычки",
    description="Удаляет привычку вместе со всеми ее отметками выполнения.",
)
async def delete_habit(
    habit_id: HabitIdPath, db_session: DBSession, current_user: CurrentUser, habit_service: HabitSvc
) -> Response:
    await habit_service.delete_habit_for_user(db_session, habit_id=habit_id, current_user=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
