"""
Unit tests for grade scale value objects.

Tests construction-time validation of ranges, scales and GPA inputs.
"""

from __future__ import annotations

import pytest
from gradescale_core.scale_models import (
    GradeInput,
    GradeResult,
    GradeScale,
    GradeScaleRange,
    ScaleType,
)


class TestGradeScaleRange:
    """Tests for GradeScaleRange dataclass."""

    def test_valid_range_creation(self) -> None:
        """Test creating a fully specified range."""
        grade_range = GradeScaleRange(
            min_value=90,
            max_value=100,
            display_label="A",
            description="Excellent",
            color="#10B981",
            gpa_equivalent=4.0,
            is_passing=True,
            order=0,
        )

        assert grade_range.display_label == "A"
        assert grade_range.gpa_equivalent == 4.0
        assert grade_range.id is None

    def test_single_point_range_allowed(self) -> None:
        """Test that min_value == max_value is a valid range."""
        grade_range = GradeScaleRange(50, 50, "P")

        assert grade_range.contains(50)
        assert not grade_range.contains(50.01)

    def test_inverted_bounds_raise(self) -> None:
        """Test that min_value > max_value raises ValueError."""
        with pytest.raises(ValueError, match="must not exceed max_value"):
            GradeScaleRange(min_value=60, max_value=50, display_label="X")

    def test_empty_label_raises(self) -> None:
        with pytest.raises(ValueError, match="display_label cannot be empty"):
            GradeScaleRange(0, 10, "")

    def test_long_label_raises(self) -> None:
        with pytest.raises(ValueError, match="at most 10 characters"):
            GradeScaleRange(0, 10, "Outstanding!")

    def test_long_color_raises(self) -> None:
        with pytest.raises(ValueError, match="color must be at most 7"):
            GradeScaleRange(0, 10, "A", color="#1234567")

    @pytest.mark.parametrize("gpa", [-0.1, 4.01])
    def test_gpa_outside_bounds_raises(self, gpa: float) -> None:
        """Test that gpa_equivalent outside 0.0-4.0 raises ValueError."""
        with pytest.raises(ValueError, match="gpa_equivalent must be between"):
            GradeScaleRange(0, 10, "A", gpa_equivalent=gpa)

    def test_midpoint(self) -> None:
        assert GradeScaleRange(80, 90, "B").midpoint == 85.0

    def test_contains_is_inclusive(self) -> None:
        """Test both bounds are part of the range."""
        grade_range = GradeScaleRange(80, 90, "B")

        assert grade_range.contains(80)
        assert grade_range.contains(90)
        assert not grade_range.contains(79.99)
        assert not grade_range.contains(90.01)


class TestGradeScale:
    """Tests for GradeScale dataclass."""

    def test_ranges_stored_as_tuple(self) -> None:
        """Test that a list of ranges is frozen into a tuple."""
        scale = GradeScale(
            name="Test",
            scale_type=ScaleType.POINTS,
            ranges=[GradeScaleRange(0, 10, "A")],  # type: ignore[arg-type]
        )

        assert isinstance(scale.ranges, tuple)

    def test_scale_type_coerced_from_string(self) -> None:
        scale = GradeScale(name="Test", scale_type="letter")  # type: ignore[arg-type]

        assert scale.scale_type is ScaleType.LETTER

    def test_unknown_scale_type_raises(self) -> None:
        with pytest.raises(ValueError):
            GradeScale(name="Test", scale_type="narrative")  # type: ignore[arg-type]

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="name cannot be empty"):
            GradeScale(name="", scale_type=ScaleType.LETTER)

    def test_ordered_ranges_by_order_then_min(self) -> None:
        """Test display ordering ignores the order ranges were supplied in."""
        scale = GradeScale(
            name="Test",
            scale_type=ScaleType.POINTS,
            ranges=(
                GradeScaleRange(0, 4, "low", order=2),
                GradeScaleRange(8, 10, "high", order=0),
                GradeScaleRange(5, 7, "mid", order=1),
            ),
        )

        assert [r.display_label for r in scale.ordered_ranges] == ["high", "mid", "low"]

    def test_max_value(self, points_scale: GradeScale) -> None:
        assert points_scale.max_value == 20

    def test_max_value_without_ranges(self) -> None:
        assert GradeScale(name="Empty", scale_type=ScaleType.POINTS).max_value is None

    def test_scope(self) -> None:
        scale = GradeScale(
            name="Test", scale_type=ScaleType.LETTER, grading_system_id=7, school_id=3
        )

        assert scale.scope == (7, 3)


class TestGradeInput:
    """Tests for GradeInput dataclass."""

    def test_default_weight(self) -> None:
        assert GradeInput(score=90).weight == 1.0

    def test_negative_weight_raises(self) -> None:
        with pytest.raises(ValueError, match="weight must be non-negative"):
            GradeInput(score=90, weight=-1)


def test_grade_result_from_range() -> None:
    """Test GradeResult copies the descriptive fields of its range."""
    grade_range = GradeScaleRange(90, 100, "A", "Excellent", "#10B981", 4.0, True, 0, id=12)

    result = GradeResult.from_range(grade_range)

    assert result == GradeResult(
        label="A",
        description="Excellent",
        color="#10B981",
        gpa_equivalent=4.0,
        is_passing=True,
    )
