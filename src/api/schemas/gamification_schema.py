"""Схемы Pydantic для геймификации (XP, значки, колесо наград)."""

import datetime
from typing import Literal

from pydantic import Field

from .base_schema import BaseSchema

# Максимум XP за одно начисление
MAX_XP_AWARD = 100_000


class GamificationStats(BaseSchema):
    """Игровая статистика пользователя."""

    xp: int = Field(..., description="Накопленный опыт")
    level: int = Field(..., description="Текущий уровень")
    xp_to_next_level: int = Field(..., description="Сколько XP осталось до следующего уровня")
    badges: list[str] = Field(default_factory=list, description="Полученные значки")
    daily_spin_available: bool = Field(..., description="Доступно ли колесо наград")
    last_spin_date: datetime.date | None = Field(None, description="Дата последнего вращения")


class AwardXPRequest(BaseSchema):
    amount: int = Field(..., gt=0, le=MAX_XP_AWARD, description="Количество начисляемого XP")
    reason: str = Field("activity", max_length=200, description="За что начисляется XP")


class AwardXPResponse(BaseSchema):
    message: str
    xp: int
    level: int
    xp_to_next_level: int


class AwardBadgeRequest(BaseSchema):
    badge_id: str = Field(..., min_length=1, max_length=50, description="Идентификатор значка")


class AwardBadgeResponse(BaseSchema):
    message: str
    badge: str | None = Field(None, description="Новый значок (если был выдан)")
    badges: list[str]


class SpinReward(BaseSchema):
    """Награда колеса."""

    type: Literal["xp", "badge", "streak_protection"]
    label: str
    amount: int | None = None
    id: str | None = None


class SpinResponse(BaseSchema):
    message: str
    reward: SpinReward
    xp: int
    level: int
    badges: list[str]


class EnableSpinResponse(BaseSchema):
    message: str
    daily_spin_available: bool
