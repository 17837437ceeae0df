"""
Эндпоинты геймификации: опыт, значки и ежедневное колесо наград.
"""

from fastapi import APIRouter

from src.api.core.dependencies import CurrentUser, DBSession, GamificationSvc
from src.api.schemas import (
    AwardBadgeRequest,
    AwardBadgeResponse,
    AwardXPRequest,
    AwardXPResponse,
    EnableSpinResponse,
    GamificationStats,
    SpinResponse,
)

router = APIRouter(prefix="/gamification", tags=["Gamification"])


@router.get("/stats", response_model=GamificationStats, summary="Игровая статистика пользователя")
async def get_stats(current_user: CurrentUser, gamification_service: GamificationSvc) -> GamificationStats:
    return gamification_service.get_stats(current_user=current_user)


@router.post("/award-xp", response_model=AwardXPResponse, summary="Начисление опыта")
async def award_xp(
    request_data: AwardXPRequest,
    db_session: DBSession,
    current_user: CurrentUser,
    gamification_service: GamificationSvc,
) -> AwardXPResponse:
    return await gamification_service.award_xp(
        db_session, current_user=current_user, amount=request_data.amount, reason=request_data.reason
    )


@router.post("/award-badge", response_model=AwardBadgeResponse, summary="Выдача значка")
async def award_badge(
    request_data: AwardBadgeRequest,
    db_session: DBSession,
    current_user: CurrentUser,
    gamification_service: GamificationSvc,
) -> AwardBadgeResponse:
    return await gamification_service.award_badge(
        db_session, current_user=current_user, badge_id=request_data.badge_id
    )


@router.post(
    "/spin",
    response_model=SpinResponse,
    summary="Ежедневное колесо наград",
    description="Доступно после разблокировки и не чаще одного раза в день.",
)
async def spin(
    db_session: DBSession, current_user: CurrentUser, gamification_service: GamificationSvc
) -> SpinResponse:
    return await gamification_service.spin(db_session, current_user=current_user)


@router.post(
    "/enable-spin",
    response_model=EnableSpinResponse,
    summary="Разблокировка колеса наград",
    description="Разблокирует колесо, если все привычки пользователя выполнены сегодня.",
)
async def enable_spin(
    db_session: DBSession, current_user: CurrentUser, gamification_service: GamificationSvc
) -> EnableSpinResponse:
    return await gamification_service.enable_spin(db_session, current_user=current_user)
