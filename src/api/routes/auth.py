"""
Эндпоинты для аутентификации.

Регистрация и вход по email и паролю. В ответ возвращается профиль
пользователя и JWT токен доступа.
"""

from fastapi import APIRouter, status

from src.api.core.dependencies import CurrentUser, DBSession, UserSvc
from src.api.core.exceptions import ForbiddenException
from src.api.core.logging import api_log as log
from src.api.core.security import create_access_token
from src.api.models import User
from src.api.schemas import AuthResponse, LoginRequest, RegisterRequest, UserSchemaRead

router = APIRouter(prefix="/auth", tags=["Authentication"])


def build_auth_response(user: User) -> AuthResponse:
    """Профиль пользователя и свежий JWT токен."""
    access_token = create_access_token(data={"user_id": user.id})

    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        access_token=access_token,
        token_type="bearer",  # noqa: S106
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Регистрация пользователя",
    description="Создает пользователя с ролью `user` и возвращает JWT токен. Email должен быть уникальным.",
)
async def register(request_data: RegisterRequest, db_session: DBSession, user_service: UserSvc) -> AuthResponse:
    """
    Регистрирует нового пользователя.

    Args:
        request_data: Имя, email, пароль и часовой пояс.
        db_session: Асинхронная сессия базы данных.
        user_service: Сервис пользователей.

    Returns:
        AuthResponse: Профиль и токен доступа.
    """
    user = await user_service.register_user(db_session, user_in=request_data)
    log.info(f"Зарегистрирован пользователь ID: {user.id}")
    return build_auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Вход по email и паролю",
)
async def login(request_data: LoginRequest, db_session: DBSession, user_service: UserSvc) -> AuthResponse:
    """
    Проверяет учетные данные и выдает JWT токен.

    Raises:
        UnauthorizedException: Неверный email или пароль.
        ForbiddenException: Пользователь деактивирован.
    """
    user = await user_service.authenticate_user(db_session, credentials=request_data)

    if not user.is_active:
        log.warning(f"Попытка входа неактивного пользователя ID: {user.id}")
        raise ForbiddenException(message="Пользователь неактивен и не может войти.", error_type="user_inactive")

    return build_auth_response(user)


@router.get(
    "/me",
    response_model=UserSchemaRead,
    summary="Профиль текущего пользователя",
)
async def read_current_user(current_user: CurrentUser) -> User:
    return current_user
