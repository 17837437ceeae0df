"""Инициализация модуля схем Pydantic."""

from .auth_schema import AuthResponse, LoginRequest, RegisterRequest, TokenPayload
from .base_schema import DB_INT_MAX, BaseSchema, DayName
from .gamification_schema import (
    AwardBadgeRequest,
    AwardBadgeResponse,
    AwardXPRequest,
    AwardXPResponse,
    EnableSpinResponse,
    GamificationStats,
    SpinResponse,
    SpinReward,
)
from .habit_log_schema import (
    HabitLogCreateResponse,
    HabitLogSchemaCreate,
    HabitLogSchemaRead,
    HabitProgressResponse,
    StreakStats,
)
from .habit_schema import HabitSchemaBase, HabitSchemaCreate, HabitSchemaRead, HabitSchemaUpdate
from .progress_schema import (
    CalendarResponse,
    MonthDayProgress,
    MonthlyInsights,
    MonthlyProgressResponse,
    WeekChunkProgress,
    WeekDayProgress,
    WeeklyInsights,
    WeeklyProgressResponse,
)
from .user_schema import UserSchemaCreate, UserSchemaRead, UserSchemaUpdate

__all__ = [
    "DB_INT_MAX",
    "BaseSchema",
    "DayName",
    "TokenPayload",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "UserSchemaCreate",
    "UserSchemaRead",
    "UserSchemaUpdate",
    "HabitSchemaBase",
    "HabitSchemaCreate",
    "HabitSchemaRead",
    "HabitSchemaUpdate",
    "HabitLogSchemaCreate",
    "HabitLogSchemaRead",
    "HabitLogCreateResponse",
    "HabitProgressResponse",
    "StreakStats",
    "WeekDayProgress",
    "MonthDayProgress",
    "WeekChunkProgress",
    "WeeklyInsights",
    "MonthlyInsights",
    "WeeklyProgressResponse",
    "MonthlyProgressResponse",
    "CalendarResponse",
    "GamificationStats",
    "AwardXPRequest",
    "AwardXPResponse",
    "AwardBadgeRequest",
    "AwardBadgeResponse",
    "SpinReward",
    "SpinResponse",
    "EnableSpinResponse",
]
