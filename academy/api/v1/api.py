"""API router for version 1."""
from fastapi import APIRouter

from academy.api.v1.endpoints import (
    admin,
    auth,
    badges,
    challenges,
    leaderboard,
    modules,
    notifications,
    progress,
    quiz_attempts,
    simulations,
    users,
)


api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(modules.router)
api_router.include_router(progress.router)
api_router.include_router(quiz_attempts.router)
api_router.include_router(simulations.router)
api_router.include_router(challenges.router)
api_router.include_router(badges.router)
api_router.include_router(leaderboard.router)
api_router.include_router(notifications.router)
api_router.include_router(admin.router)
