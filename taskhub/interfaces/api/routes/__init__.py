from fastapi import FastAPI

from .admin import router as admin_router
from .groups import router as groups_router
from .messages import router as messages_router
from .realtime import router as realtime_router
from .team_groups import router as team_groups_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(groups_router)
    app.include_router(team_groups_router)
    app.include_router(messages_router)
    app.include_router(admin_router)
    app.include_router(realtime_router)
