from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskhub.config import get_settings
from taskhub.domain.entities import EventCatalog
from taskhub.infrastructure.database import engine, initialize_database
from taskhub.infrastructure.notifications import NotificationPublisher, RealtimeChannel
from taskhub.interfaces.api.dependencies import authenticate_live_token
from taskhub.interfaces.api.routes import register_routes
from taskhub.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database tables on startup and release connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Taskhub API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    channel = RealtimeChannel(authenticate_live_token)
    app.state.event_catalog = EventCatalog.default()
    app.state.realtime_channel = channel
    app.state.notification_publisher = NotificationPublisher(channel)

    register_routes(app)
    return app


app = create_app()
