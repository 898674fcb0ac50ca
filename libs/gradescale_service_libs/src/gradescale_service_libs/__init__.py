"""
Grade scale service libraries.

Shared infrastructure for services built on gradescale_core: structured
logging and settings helpers.
"""

from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "configure_service_logging",
    "create_service_logger",
]
