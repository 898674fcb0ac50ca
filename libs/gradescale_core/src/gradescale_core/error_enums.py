"""
gradescale_core.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"  # Internal processing failures


class GradeScaleErrorCode(str, Enum):
    """
    Specific error codes for grade scale conversion and administration.
    """

    INVALID_SCALE = "INVALID_SCALE"
    UNSUPPORTED_SCALE_TYPE = "UNSUPPORTED_SCALE_TYPE"
    INVALID_RANGE_SET = "INVALID_RANGE_SET"
    SCALE_NOT_FOUND = "SCALE_NOT_FOUND"
    RANGE_NOT_FOUND = "RANGE_NOT_FOUND"
    DEFAULT_SCALE_DELETION = "DEFAULT_SCALE_DELETION"
    SCALE_IN_USE = "SCALE_IN_USE"
    DUPLICATE_SCALE_NAME = "DUPLICATE_SCALE_NAME"
