"""Сервис для работы с пользователями: регистрация и аутентификация."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import BadRequestException, UnauthorizedException
from src.api.core.logging import api_log as log
from src.api.core.security import get_password_hash, verify_password
from src.api.models import User, UserRole
from src.api.repositories import UserRepository
from src.api.schemas import LoginRequest, RegisterRequest, UserSchemaCreate, UserSchemaUpdate

from .base_service import BaseService


class UserService(BaseService[User, UserRepository, UserSchemaCreate, UserSchemaUpdate]):
    """
    Сервис для управления пользователями.

    Отвечает за регистрацию и проверку учетных данных.
    """

    def __init__(self, user_repository: UserRepository):
        super().__init__(repository=user_repository)

    async def register_user(self, db_session: AsyncSession, *, user_in: RegisterRequest) -> User:
        """
        Регистрирует нового пользователя.

        Новый пользователь всегда получает роль `user`.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_in (RegisterRequest): Данные регистрации.

        Returns:
            User: Созданный пользователь.

        Raises:
            BadRequestException: Если пользователь с таким email уже существует.
        """
        user_exists_exc = BadRequestException(
            message="Пользователь с таким email уже существует.",
            error_type="user_already_exists",
            loc=["body", "email"],
        )

        if await self.repository.get_by_email(db_session, email=user_in.email):
            log.info(f"Повторная регистрация email {user_in.email} отклонена.")
            raise user_exists_exc

        user_create = UserSchemaCreate(
            name=user_in.name,
            email=user_in.email,
            hashed_password=get_password_hash(user_in.password),
            timezone=user_in.timezone,
            role=UserRole.USER,
        )

        try:
            return await self.create(db_session, obj_in=user_create)

        # Email занят параллельным запросом между проверкой и вставкой
        except IntegrityError:
            log.warning(f"Race condition при регистрации email {user_in.email}.")
            raise user_exists_exc from None

    async def authenticate_user(self, db_session: AsyncSession, *, credentials: LoginRequest) -> User:
        """
        Проверяет email и пароль.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            credentials (LoginRequest): Email и пароль.

        Returns:
            User: Аутентифицированный пользователь.

        Raises:
            UnauthorizedException: Если email не найден или пароль неверен.
        """
        user = await self.repository.get_by_email(db_session, email=credentials.email)

        # Одинаковый ответ для неизвестного email и неверного пароля
        if not user or not verify_password(credentials.password, user.hashed_password):
            log.info(f"Неудачная попытка входа для email {credentials.email}.")
            raise UnauthorizedException(message="Неверный email или пароль.", error_type="invalid_credentials")

        log.info(f"Пользователь ID: {user.id} вошел в систему.")
        return user
