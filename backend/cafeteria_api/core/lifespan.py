"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from shared.config.logging import rest_api_logger as logger
from shared.config.logging import setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import get_engine

from cafeteria_api.core.dependencies import get_persistence
from cafeteria_api.models import Base
from cafeteria_api.seed import seed


def prepare_stores() -> None:
    """
    Create the remote schema and seed demo data into each configured store.

    A remote failure here is logged and startup continues on the local store.
    """
    persistence = get_persistence()
    engine = get_engine()

    if engine is not None:
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created/verified")
            if settings.seed_demo_data:
                seed(persistence.primary)
        except SQLAlchemyError as e:
            logger.error("Remote store unavailable at startup, continuing with local store", error=str(e))
    else:
        logger.warning("DATABASE_URL not set, running in demo mode (local store only)")

    if settings.seed_demo_data:
        seed(persistence.secondary)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Initialize logging
    setup_logging()

    # Validate production secrets before startup
    secret_errors = settings.validate_production_secrets()
    if secret_errors:
        for error in secret_errors:
            logger.error("Configuration error", error=error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(secret_errors)}. "
                "Server will not start with insecure configuration."
            )
        else:
            logger.warning("Running with insecure defaults (acceptable for development only)")

    logger.info(
        "Starting REST API",
        port=settings.rest_api_port,
        env=settings.environment,
        remote_configured=settings.remote_configured,
    )

    prepare_stores()

    yield

    logger.info("Shutting down REST API")
    engine = get_engine()
    if engine is not None:
        engine.dispose()
