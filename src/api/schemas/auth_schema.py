"""Схемы Pydantic для аутентификации."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.api.models import UserRole

from .base_schema import BaseSchema


class TokenPayload(BaseModel):
    """Данные (payload), закодированные в JWT."""

    user_id: int = Field(..., description="ID пользователя")
    exp: int | None = Field(None, description="Время истечения токена (Unix timestamp)")


class RegisterRequest(BaseSchema):
    """Запрос на регистрацию пользователя."""

    name: str = Field(..., min_length=1, max_length=100, description="Имя пользователя")
    email: EmailStr = Field(..., description="Email (логин)")
    # bcrypt учитывает только первые 72 байта пароля
    password: str = Field(..., min_length=6, max_length=72, description="Пароль (не менее 6 символов)")
    timezone: str = Field("UTC", max_length=50, description="Часовой пояс (например, Europe/Moscow)")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Неизвестный часовой пояс: {value}") from None
        return value


class LoginRequest(BaseSchema):
    """Запрос на вход по email и паролю."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=1, description="Пароль")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class AuthResponse(BaseSchema):
    """Ответ на регистрацию/вход: профиль пользователя и JWT токен."""

    id: int = Field(..., description="ID пользователя")
    name: str = Field(..., description="Имя пользователя")
    email: str = Field(..., description="Email пользователя")
    role: UserRole = Field(..., description="Роль пользователя")
    access_token: str = Field(..., description="JWT токен доступа")
    token_type: str = Field(default="bearer", description="Тип токена (всегда 'bearer')")
