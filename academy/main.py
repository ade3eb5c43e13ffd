"""FastAPI application factory."""
from __future__ import annotations

from typing import List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from academy.api.v1 import api_router
from academy.config import settings


tags_metadata: List[dict[str, str]] = [
    {"name": "auth", "description": "Register learners and issue authentication tokens."},
    {"name": "users", "description": "Learner profiles with XP and level."},
    {"name": "modules", "description": "Browse the published course catalog."},
    {"name": "progress", "description": "Module progress and the learner dashboard summary."},
    {"name": "quizzes", "description": "Submit and review quiz attempts."},
    {"name": "simulations", "description": "Record use of business simulations."},
    {"name": "challenges", "description": "Complete the daily challenge."},
    {"name": "badges", "description": "Badge catalog and per-learner badge progress."},
    {"name": "leaderboard", "description": "Top learners by XP."},
    {"name": "notifications", "description": "Level-up and badge notifications."},
    {"name": "admin", "description": "Catalog management, badge admin and platform statistics."},
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Course platform for content creators with XP, levels and badges.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors()), "message": "Validation failed"},
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
