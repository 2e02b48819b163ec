# Main application entry point
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import (
    auth_router,
    domains_router,
    health_router,
    notes_router,
    subscriptions_router,
    tags_router,
)
from .config import get_settings
from .core.exceptions import register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import create_tables, dispose_engine

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting NoteFeed application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    # schema is owned by alembic outside development
    if settings.environment == "development":
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down NoteFeed application")
    await dispose_engine()


def create_app() -> FastAPI:
    """Build the ASGI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Notes organized by domain and tag, published through access-scoped feeds",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in (
        auth_router,
        domains_router,
        tags_router,
        notes_router,
        subscriptions_router,
    ):
        app.include_router(router, prefix=settings.api_prefix)

    app.include_router(health_router)

    @app.get(settings.api_prefix)
    async def api_root():
        return {
            "message": "NoteFeed API",
            "version": settings.app_version,
            "documentation": {
                "swagger_ui": "/docs",
                "redoc": "/redoc",
                "openapi_json": "/openapi.json",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notefeed.main:app", host=settings.host, port=settings.port, reload=settings.reload)
