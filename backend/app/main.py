"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.api.v2.router import api_router
from app.api.v2.endpoints.health import get_health
from app.core.config import settings
from app.core.exceptions import setup_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.session import init_db, close_db
from app.db.init_db import create_tables
from app.deps.di_container import Container, set_container

logger = get_logger(__name__)


# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, DB and the DI container.
    """
    # Startup
    setup_logging()

    await init_db()
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()

    container = Container()
    container.config.from_dict({
        "database_url": settings.DATABASE_URL,
    })

    # Store container in app state for access in routes
    app.state.container = container
    set_container(container)

    logger.info("Application started", extra={"version": settings.VERSION})

    yield

    # Shutdown
    await close_db()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Call center management API",
        openapi_url=f"{settings.API_V2_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting middleware
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    # Include API router
    app.include_router(api_router, prefix=settings.API_V2_PREFIX)

    @app.get("/health", response_model=None, include_in_schema=False)
    async def root_health(response: Response):
        """Root-level health check endpoint."""
        return await get_health(response)

    # Global exception handlers, including RateLimitExceeded
    setup_exception_handlers(app)

    return app


app = create_app()
