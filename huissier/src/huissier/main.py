"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from huissier import __version__
from huissier.config.settings import Settings, get_settings
from huissier.di import (
    DIContainer,
    initialize_container,
    set_container,
    shutdown_container,
)
from huissier.domain.exceptions import HuissierException
from huissier.infrastructure.monitoring import get_logger, setup_logging
from huissier.presentation.api.middleware import huissier_exception_handler
from huissier.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from huissier.presentation.api.middleware.origin_guard import (
    OriginGuardMiddleware,
)
from huissier.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)
from huissier.presentation.api.routes import auth, health, users


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # Structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Huissier application (ENV={settings.ENV})")

    set_container(DIContainer(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Huissier application...")
        await initialize_container()
        logger.info("Huissier application started successfully")

        yield

        logger.info("Shutting down Huissier application...")
        await shutdown_container()
        logger.info("Huissier application shutdown complete")

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Wallet signature authentication and role-based access",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.ORIGIN_GUARD_ENABLED:
        app.add_middleware(
            OriginGuardMiddleware, allowed_origins=settings.CORS_ORIGINS
        )
        logger.info("Origin guard enabled for /api routes")

    # Exception handlers
    app.add_exception_handler(HuissierException, huissier_exception_handler)

    # Register routes
    app.include_router(health.router)
    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": settings.APP_NAME,
            "status": "running",
            "version": __version__,
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """
            Prometheus metrics endpoint.

            Returns metrics in Prometheus text format for scraping.
            """
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Huissier application created successfully")
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "huissier.main:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )
