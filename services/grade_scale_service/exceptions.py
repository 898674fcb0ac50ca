"""Custom exception classes for Grade Scale Service."""

from __future__ import annotations

from gradescale_core.error_enums import ErrorCode, GradeScaleErrorCode


class GradeScaleServiceError(Exception):
    """Base exception for Grade Scale Service errors."""

    def __init__(self, message: str, error_code: str = ErrorCode.UNKNOWN_ERROR.value) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ScaleNotFoundError(GradeScaleServiceError):
    """Raised when a grade scale is not found."""

    def __init__(self, scale_id: int) -> None:
        message = f"Grade scale not found: {scale_id}"
        super().__init__(message, GradeScaleErrorCode.SCALE_NOT_FOUND.value)
        self.scale_id = scale_id


class RangeNotFoundError(GradeScaleServiceError):
    """Raised when a grade scale range is not found."""

    def __init__(self, range_id: int) -> None:
        message = f"Grade scale range not found: {range_id}"
        super().__init__(message, GradeScaleErrorCode.RANGE_NOT_FOUND.value)
        self.range_id = range_id


class InvalidRangeSetError(GradeScaleServiceError):
    """Raised when a range set contains overlaps and must not be persisted."""

    def __init__(self, violations: list[str]) -> None:
        message = "Invalid range set: " + "; ".join(violations)
        super().__init__(message, GradeScaleErrorCode.INVALID_RANGE_SET.value)
        self.violations = violations


class DefaultScaleDeletionError(GradeScaleServiceError):
    """Raised when deleting the default scale of a scope."""

    def __init__(self, scale_id: int) -> None:
        message = "Cannot delete default grade scale. Set another scale as default first."
        super().__init__(message, GradeScaleErrorCode.DEFAULT_SCALE_DELETION.value)
        self.scale_id = scale_id


class ScaleInUseError(GradeScaleServiceError):
    """Raised when deleting a scale that grade records still reference."""

    def __init__(self, scale_id: int, reference_count: int) -> None:
        message = (
            f"Cannot delete grade scale that is currently in use ({reference_count} grade records)"
        )
        super().__init__(message, GradeScaleErrorCode.SCALE_IN_USE.value)
        self.scale_id = scale_id
        self.reference_count = reference_count


class DuplicateScaleNameError(GradeScaleServiceError):
    """Raised when a scale name already exists in the grading system and school."""

    def __init__(self, name: str, grading_system_id: int | None) -> None:
        message = f"Grade scale name '{name}' already exists in grading system {grading_system_id}"
        super().__init__(message, GradeScaleErrorCode.DUPLICATE_SCALE_NAME.value)
        self.name = name
        self.grading_system_id = grading_system_id
