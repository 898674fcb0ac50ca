"""Configuration utilities for grade scale services."""

from .database_utils import build_database_url
from .service_settings import ServiceSettingsBase

__all__ = ["ServiceSettingsBase", "build_database_url"]
