"""Exceptions raised by the grade scale engine for malformed input."""

from __future__ import annotations

from .error_enums import GradeScaleErrorCode


class GradeScaleValidationError(ValueError):
    """Base class for input the engine refuses to evaluate."""

    def __init__(self, message: str, error_code: GradeScaleErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class InvalidScaleError(GradeScaleValidationError):
    """Raised when a scale cannot be used for a lookup (e.g. it has no ranges)."""

    def __init__(self, message: str, scale_name: str | None = None) -> None:
        super().__init__(message, GradeScaleErrorCode.INVALID_SCALE)
        self.scale_name = scale_name


class UnsupportedScaleTypeError(GradeScaleValidationError):
    """Raised when a scale type has no percentage normalization rule."""

    def __init__(self, scale_type: str) -> None:
        message = f"Scale type '{scale_type}' cannot be normalized to a percentage"
        super().__init__(message, GradeScaleErrorCode.UNSUPPORTED_SCALE_TYPE)
        self.scale_type = scale_type
