"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.api import auth, users
from src.config import Settings, get_settings
from src.database import create_db_engine, create_session_factory, init_db
from src.exceptions import register_exception_handlers
from src.services.auth import TokenService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send application logs to stderr in a single format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application from an explicit settings object."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        init_db(engine)
        logger.info(f"User accounts API started ({settings.environment})")
        yield
        engine.dispose()

    app = FastAPI(
        title="User Accounts API",
        description="Register, authenticate and manage user records",
        version="1.0.0",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                "http://localhost:3000",
                "http://localhost:5000",
            ],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(users.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness check."""
        return "Welcome to root URL of Server"

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
