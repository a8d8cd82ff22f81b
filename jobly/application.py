import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobly.api.endpoints import auth, health, jobs, users
from jobly.core.config import Settings
from jobly.core.database import build_engine, build_session_factory, init_db
from jobly.core.exceptions import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The settings, engine and session factory are created here once and
    kept on app.state; request dependencies read them from there.
    """
    settings = settings or Settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup and shutdown events.
        """
        # Startup
        logger.info(f"Starting up {settings.PROJECT_NAME}...")
        init_db(engine, create_tables=settings.AUTO_CREATE_TABLES)
        logger.info("Database initialized successfully")

        yield

        # Shutdown
        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Job board API: users, job postings and applications",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(jobs.router)

    @app.get("/")
    def root():
        """Root endpoint - API health check"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "status": "healthy"
        }

    return app
