from __future__ import annotations

from services.grade_scale_service.exceptions import (
    DefaultScaleDeletionError,
    DuplicateScaleNameError,
    GradeScaleServiceError,
    InvalidRangeSetError,
    ScaleInUseError,
)


class TestGradeScaleServiceErrors:
    def test_base_error_defaults_to_unknown_code(self) -> None:
        error = GradeScaleServiceError("Something failed")

        assert str(error) == "Something failed"
        assert error.message == "Something failed"
        assert error.error_code == "UNKNOWN_ERROR"

    def test_invalid_range_set_joins_violations(self) -> None:
        violations = [
            "Range overlap detected between F and X",
            "Range overlap detected between X and P",
        ]

        error = InvalidRangeSetError(violations)

        assert error.violations == violations
        assert error.message == (
            "Invalid range set: Range overlap detected between F and X; "
            "Range overlap detected between X and P"
        )

    def test_errors_carry_their_codes(self) -> None:
        assert DefaultScaleDeletionError(1).error_code == "DEFAULT_SCALE_DELETION"
        assert ScaleInUseError(1, 2).error_code == "SCALE_IN_USE"
        assert DuplicateScaleNameError("Letters", 5).error_code == "DUPLICATE_SCALE_NAME"

    def test_all_errors_share_the_service_base(self) -> None:
        assert isinstance(ScaleInUseError(1, 1), GradeScaleServiceError)
