import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard.api.api import api_router
from jobboard.api.errors import register_exception_handlers
from jobboard.core.config import Settings, settings as default_settings
from jobboard.db.base import Base
from jobboard.db.session import build_engine, build_session_factory
from jobboard.middleware import EdgeGatekeeperMiddleware, RequestLoggingMiddleware

# Import all models so SQLAlchemy can discover them for table creation
from jobboard import models  # noqa: F401

logger = logging.getLogger("jobboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    Base.metadata.create_all(bind=app.state.engine)
    logger.info(f"{app.state.settings.APP_NAME} started ({app.state.settings.APP_ENV})")
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="Job board with session authentication, search and hiring dashboards",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = build_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Added innermost first: logging wraps CORS, CORS wraps the gatekeeper
    app.add_middleware(EdgeGatekeeperMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint."""
        return {"message": f"Welcome to {settings.APP_NAME} API"}

    @app.get("/health", tags=["Health"])
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Include API router with /api/v1 prefix
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
