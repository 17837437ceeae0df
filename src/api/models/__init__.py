from .base import Base
from .habit import Habit, HabitCategory, HabitFrequency
from .habit_log import HabitLog
from .user import User, UserRole

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Habit",
    "HabitCategory",
    "HabitFrequency",
    "HabitLog",
]
