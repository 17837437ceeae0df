"""Репозиторий для работы с моделью User."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import User
from src.api.repositories.base_repository import BaseRepository
from src.api.schemas import UserSchemaCreate, UserSchemaUpdate


class UserRepository(BaseRepository[User, UserSchemaCreate, UserSchemaUpdate]):
    """
    Репозиторий для выполнения CRUD-операций с моделью User.

    Наследует общие методы от BaseRepository и содержит специфичные для User методы.
    """

    async def get_by_email(self, db_session: AsyncSession, *, email: str) -> User | None:
        """
        Получает пользователя по email (без учета регистра).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            email (str): Email пользователя.

        Returns:
            User | None: Экземпляр модели User или None, если пользователь не найден.
        """
        normalized_email = email.strip().lower()

        user = await self.get_by_filter_first_or_none(db_session, self.model.email == normalized_email)

        status = f"найден (ID: {user.id})" if user else "не найден"
        log.debug(f"Пользователь с email {normalized_email} {status}.")

        return user

    async def get_user_by_id_for_update(self, db_session: AsyncSession, *, user_id: int) -> User | None:
        """
        Перечитывает пользователя из БД и блокирует строку до конца транзакции (SELECT ... FOR UPDATE).

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (int): ID пользователя.

        Returns:
            User | None: Пользователь с актуальными значениями полей или None.
        """
        statement = (
            select(self.model).where(self.model.id == user_id).with_for_update().execution_options(populate_existing=True)
        )
        result = await db_session.execute(statement)
        return result.scalar_one_or_none()
