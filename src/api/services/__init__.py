"""Инициализация модуля сервисов."""

from .base_service import BaseService
from .gamification_service import GamificationService
from .habit_log_service import HabitLogService
from .habit_service import HabitService
from .progress_service import ProgressService
from .user_service import UserService

__all__ = [
    "BaseService",
    "UserService",
    "HabitService",
    "HabitLogService",
    "ProgressService",
    "GamificationService",
]
