"""Модель SQLAlchemy для User (Пользователь)."""

from datetime import date
from enum import Enum as PyEnum  # Чтобы не конфликтовать с sqlalchemy.Enum
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Date, Integer, String
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


class UserRole(str, PyEnum):
    """Роли пользователей."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    Представляет зарегистрированного пользователя.

    Attributes:
        id: Первичный ключ (унаследован от Base).
        name: Имя пользователя.
        email: Уникальный email (хранится в нижнем регистре).
        hashed_password: bcrypt-хеш пароля.
        role: Роль пользователя (user / admin).
        timezone: Часовой пояс (IANA), определяет "сегодня" для пользователя.
        is_active: Флаг, активен ли пользователь.
        xp: Накопленный опыт (неотрицательный, только растет).
        level: Уровень, вычисляется из xp.
        badges: Список полученных значков (без повторов).
        daily_spin_available: Доступно ли ежедневное колесо наград.
        last_spin_date: Дата последнего вращения колеса.
        habits: Привычки пользователя.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SqlEnum(UserRole, name="user_role_enum", values_callable=lambda enum: [item.value for item in enum]),
        default=UserRole.USER,
        nullable=False,
    )
    timezone: Mapped[str] = mapped_column(String(50), default="UTC", nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    # Геймификация
    xp: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    badges: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    daily_spin_available: Mapped[bool] = mapped_column(default=False, nullable=False)
    last_spin_date: Mapped[date | None] = mapped_column(Date)

    # Связи
    habits: Mapped[list["Habit"]] = relationship(
        back_populates="user", cascade="all", passive_deletes=True
    )
