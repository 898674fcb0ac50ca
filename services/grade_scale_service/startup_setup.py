from __future__ import annotations

from dishka import AsyncContainer
from gradescale_service_libs.logging_utils import configure_service_logging, create_service_logger
from sqlalchemy.ext.asyncio import AsyncEngine

from services.grade_scale_service.config import Settings, settings
from services.grade_scale_service.di import create_container, uses_mock_repository
from services.grade_scale_service.models_db import Base

logger = create_service_logger("grade_scale_service.startup")


async def initialize_database_schema(engine: AsyncEngine) -> None:
    """Create the grade scale tables if they do not exist."""
    try:
        logger.info("Initializing database schema...")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema initialized successfully")
    except Exception as e:
        logger.critical(f"Failed to initialize database schema: {e}", exc_info=True)
        raise


async def initialize_services(service_settings: Settings | None = None) -> AsyncContainer:
    """Configure logging, build the container and prepare storage."""
    service_settings = service_settings or settings
    configure_service_logging(
        service_settings.SERVICE_NAME,
        environment=service_settings.ENVIRONMENT.value,
        log_level=service_settings.LOG_LEVEL,
    )

    container = create_container(service_settings)
    if not uses_mock_repository(service_settings):
        engine = await container.get(AsyncEngine)
        await initialize_database_schema(engine)

    logger.info(
        "Grade Scale Service initialized",
        environment=service_settings.ENVIRONMENT.value,
        mock_repository=uses_mock_repository(service_settings),
    )
    return container


async def shutdown_services(container: AsyncContainer) -> None:
    """Release container resources, disposing the database engine."""
    try:
        await container.close()
        logger.info("Container resources shutdown completed")
    except Exception as e:
        logger.error(f"Error during container resource shutdown: {e}")
        raise

    logger.info("Grade Scale Service shutdown completed")
