"""Основной API роутер, объединяющий все остальные роутеры."""

from fastapi import APIRouter

from . import auth, gamification, habits, logs, progress

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(habits.router)
api_router.include_router(logs.router)
api_router.include_router(progress.router)
api_router.include_router(gamification.router)

__all__ = ["api_router"]
