"""
Базовый класс для сервисов.

Сервис - единица работы (Unit of Work): вызывает репозиторий,
фиксирует транзакцию при успехе и откатывает ее при любой ошибке.
"""

from typing import Any, Generic, TypeVar, cast

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import Base as SQLAlchemyBaseModel
from src.api.repositories import BaseRepository

ModelType = TypeVar("ModelType", bound=SQLAlchemyBaseModel)
RepositoryType = TypeVar("RepositoryType", bound=BaseRepository)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseService(Generic[ModelType, RepositoryType, CreateSchemaType, UpdateSchemaType]):
    """
    Базовый сервис с общими операциями и управлением транзакциями.

    Attributes:
        repository (RepositoryType): Экземпляр репозитория для работы с данными.
    """

    def __init__(self, repository: RepositoryType):
        self.repository = repository

    @property
    def model_name(self) -> str:
        return self.repository.model.__name__

    async def get_by_id(self, db_session: AsyncSession, *, obj_id: int) -> ModelType:
        """
        Получает объект по ID или выбрасывает исключение, если объект не найден.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            obj_id (int): ID объекта.

        Returns:
            ModelType: Найденный объект.

        Raises:
            NotFoundException: Если объект с указанным ID не найден.
        """
        db_obj = await self.repository.get_by_id(db_session, obj_id=obj_id)

        if not db_obj:
            raise NotFoundException(
                message=f"{self.model_name} с ID {obj_id} не найден.",
                error_type=f"{self.model_name.lower()}_not_found",
            )

        return cast(ModelType, db_obj)

    async def create(self, db_session: AsyncSession, *, obj_in: CreateSchemaType | dict[str, Any]) -> ModelType:
        """
        Создает новый объект и фиксирует транзакцию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            obj_in (CreateSchemaType | dict[str, Any]): Данные для создания.

        Returns:
            ModelType: Созданный объект.
        """
        try:
            db_obj = await self.repository.create(db_session, obj_in=obj_in)
            await db_session.commit()

            log.info(f"{self.model_name} (ID: {db_obj.id}) успешно создан.")
            return cast(ModelType, db_obj)

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при создании {self.model_name}: {exc}", exc_info=True)
            raise

    async def update(
        self,
        db_session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | dict[str, Any],
    ) -> ModelType:
        """
        Обновляет объект и фиксирует транзакцию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            db_obj (ModelType): Объект для обновления.
            obj_in (UpdateSchemaType | dict[str, Any]): Данные для обновления.

        Returns:
            ModelType: Обновленный объект.
        """
        obj_id = db_obj.id

        try:
            updated_obj = await self.repository.update(db_session, db_obj=db_obj, obj_in=obj_in)
            await db_session.commit()

            log.info(f"{self.model_name} (ID: {obj_id}) успешно обновлен.")
            return cast(ModelType, updated_obj)

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при обновлении {self.model_name} (ID: {obj_id}): {exc}", exc_info=True)
            raise

    async def delete(self, db_session: AsyncSession, *, db_obj: ModelType) -> None:
        """
        Удаляет объект и фиксирует транзакцию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            db_obj (ModelType): Объект для удаления.
        """
        obj_id = db_obj.id

        try:
            await self.repository.remove(db_session, db_obj=db_obj)
            await db_session.commit()

            log.info(f"{self.model_name} (ID: {obj_id}) успешно удален.")

        except Exception as exc:
            await db_session.rollback()
            log.error(f"Ошибка при удалении {self.model_name} (ID: {obj_id}): {exc}", exc_info=True)
            raise
