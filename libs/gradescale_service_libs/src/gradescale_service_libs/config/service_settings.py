"""Base settings class for services."""

from __future__ import annotations

from gradescale_core.config_enums import Environment
from pydantic_settings import BaseSettings

from .database_utils import build_database_url


class ServiceSettingsBase(BaseSettings):
    """
    Settings shared by every service.

    Subclasses set their own env_prefix through model_config.
    """

    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    LOG_LEVEL: str = "INFO"

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    def build_database_url(
        self,
        *,
        database_name: str,
        service_env_var_prefix: str,
        dev_port: int,
        dev_host: str = "localhost",
    ) -> str:
        return build_database_url(
            database_name=database_name,
            service_env_var_prefix=service_env_var_prefix,
            is_production=self.is_production(),
            dev_port=dev_port,
            dev_host=dev_host,
        )
