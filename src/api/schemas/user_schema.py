"""Схемы Pydantic для модели User."""

from datetime import date, datetime

from pydantic import Field

from src.api.models import UserRole

from .base_schema import BaseSchema


class UserSchemaCreate(BaseSchema):
    """Данные для создания пользователя (пароль уже захеширован)."""

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)
    hashed_password: str = Field(..., max_length=255)
    timezone: str = Field("UTC", max_length=50)
    role: UserRole = Field(UserRole.USER)


class UserSchemaUpdate(BaseSchema):
    """Частичное обновление пользователя (служебные поля геймификации)."""

    xp: int | None = Field(None, ge=0)
    level: int | None = Field(None, ge=1)
    badges: list[str] | None = None
    daily_spin_available: bool | None = None
    last_spin_date: date | None = None


class UserSchemaRead(BaseSchema):
    """Профиль пользователя (ответ API)."""

    id: int = Field(..., description="ID пользователя")
    name: str = Field(..., description="Имя пользователя")
    email: str = Field(..., description="Email пользователя")
    role: UserRole = Field(..., description="Роль пользователя")
    timezone: str = Field(..., description="Часовой пояс пользователя")
    xp: int = Field(..., description="Накопленный опыт")
    level: int = Field(..., description="Текущий уровень")
    badges: list[str] = Field(default_factory=list, description="Полученные значки")
    created_at: datetime = Field(..., description="Время регистрации")
