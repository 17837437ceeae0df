"""Инициализация модуля репозиториев."""

from .base_repository import BaseRepository
from .habit_log_repository import HabitLogRepository
from .habit_repository import HabitRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "HabitRepository",
    "HabitLogRepository",
]
