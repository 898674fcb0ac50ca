from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv
from gradescale_core.config_enums import Environment
from gradescale_service_libs.config import ServiceSettingsBase
from pydantic import Field
from pydantic_settings import SettingsConfigDict

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class Settings(ServiceSettingsBase):
    """
    Configuration settings for the Grade Scale Service.

    These settings can be overridden via environment variables prefixed with
    GRADE_SCALE_SERVICE_.
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    SERVICE_NAME: str = "grade_scale_service"
    USE_MOCK_REPOSITORY: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """Return the database URL for the scale repository."""
        env_type = os.getenv("ENV_TYPE", "development").lower()
        if env_type == "docker":
            dev_host = os.getenv("GRADE_SCALE_SERVICE_DB_HOST", "grade_scale_db")
            dev_port = int(os.getenv("GRADE_SCALE_SERVICE_DB_PORT", "5432"))
        else:
            dev_host = "localhost"
            dev_port = 5440

        return self.build_database_url(
            database_name="gradescale_scales",
            service_env_var_prefix="GRADE_SCALE_SERVICE",
            dev_port=dev_port,
            dev_host=dev_host,
        )

    # Database Pool Configuration
    DATABASE_POOL_SIZE: int = Field(default=10, description="Database connection pool size")
    DATABASE_MAX_OVERFLOW: int = Field(default=20, description="Maximum overflow connections")
    DATABASE_POOL_PRE_PING: bool = Field(default=True, description="Pre-ping connections")
    DATABASE_POOL_RECYCLE: int = Field(
        default=3600, description="Recycle connections after seconds"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="GRADE_SCALE_SERVICE_",
    )


settings = Settings()
