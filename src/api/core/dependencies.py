"""Зависимости FastAPI: сессия БД, репозитории, сервисы и текущий пользователь."""

from typing import Annotated

from fastapi import Depends, Path, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.models import Habit, HabitLog, User
from src.api.repositories import HabitLogRepository, HabitRepository, UserRepository
from src.api.schemas import DB_INT_MAX
from src.api.services import (
    GamificationService,
    HabitLogService,
    HabitService,
    ProgressService,
    UserService,
)

from .database import get_db_session
from .exceptions import ForbiddenException, UnauthorizedException
from .logging import api_log as log
from .security import verify_and_decode_token

# --- Сессия ---

DBSession = Annotated[AsyncSession, Depends(get_db_session)]

# ID привычки в пути: значения вне диапазона колонки отклоняются валидацией (400)
HabitIdPath = Annotated[int, Path(gt=0, le=DB_INT_MAX, description="ID привычки")]


# --- Репозитории ---


def get_user_repository() -> UserRepository:
    return UserRepository(User)


def get_habit_repository() -> HabitRepository:
    return HabitRepository(Habit)


def get_habit_log_repository() -> HabitLogRepository:
    return HabitLogRepository(HabitLog)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
HabitRepo = Annotated[HabitRepository, Depends(get_habit_repository)]
HabitLogRepo = Annotated[HabitLogRepository, Depends(get_habit_log_repository)]


# --- Сервисы ---


def get_user_service(repository: UserRepo) -> UserService:
    return UserService(user_repository=repository)


def get_habit_service(repository: HabitRepo) -> HabitService:
    return HabitService(habit_repository=repository)


def get_habit_log_service(repository: HabitLogRepo, habit_repository: HabitRepo) -> HabitLogService:
    return HabitLogService(log_repository=repository, habit_repository=habit_repository)


def get_progress_service(habit_repository: HabitRepo, log_repository: HabitLogRepo) -> ProgressService:
    return ProgressService(habit_repository=habit_repository, log_repository=log_repository)


def get_gamification_service(
    user_repository: UserRepo, habit_repository: HabitRepo, log_repository: HabitLogRepo
) -> GamificationService:
    return GamificationService(
        user_repository=user_repository,
        habit_repository=habit_repository,
        log_repository=log_repository,
    )


UserSvc = Annotated[UserService, Depends(get_user_service)]
HabitSvc = Annotated[HabitService, Depends(get_habit_service)]
HabitLogSvc = Annotated[HabitLogService, Depends(get_habit_log_service)]
ProgressSvc = Annotated[ProgressService, Depends(get_progress_service)]
GamificationSvc = Annotated[GamificationService, Depends(get_gamification_service)]


# --- Аутентификация ---

# Схема для JWT Bearer токена (auto_error=False: отсутствие токена обрабатываем сами и отвечаем 401)
bearer_schema = HTTPBearer(auto_error=False)


async def get_current_user(
    db_session: DBSession,
    user_repo: UserRepo,
    token_credentials: HTTPAuthorizationCredentials | None = Security(bearer_schema),
) -> User:
    """
    Возвращает владельца JWT из заголовка `Authorization: Bearer`.

    Args:
        db_session (AsyncSession): Асинхронная сессия базы данных.
        user_repo (UserRepo): Репозиторий пользователей.
        token_credentials (HTTPAuthorizationCredentials | None): Схема и токен из заголовка.

    Returns:
        User: Активный пользователь.

    Raises:
        UnauthorizedException: Нет токена, токен невалиден или пользователь удален.
        ForbiddenException: Если пользователь деактивирован.
    """
    if token_credentials is None or not token_credentials.credentials:
        log.debug("Запрос без Bearer токена.")
        raise UnauthorizedException(message="Токен авторизации не предоставлен.", error_type="token_missing")

    # UnauthorizedException выбрасывается из verify_and_decode_token в случае проблем с токеном
    token_payload = verify_and_decode_token(token_credentials.credentials)

    user = await user_repo.get_by_id(db_session, obj_id=token_payload.user_id)

    if user is None:
        log.warning(f"Токен ссылается на несуществующего пользователя ID {token_payload.user_id}.")
        raise UnauthorizedException(message="Пользователь не найден.", error_type="token_user_not_found")

    if not user.is_active:
        log.warning(f"Запрос от деактивированного пользователя ID {user.id}.")
        raise ForbiddenException(message="Пользователь неактивен.", error_type="user_inactive")

    log.debug(f"Аутентифицирован пользователь: ID {user.id}, email {user.email}")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
