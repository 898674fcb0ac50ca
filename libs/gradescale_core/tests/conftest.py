"""Shared fixtures for grade scale engine tests."""

from __future__ import annotations

import pytest
from gradescale_core.scale_models import GradeScale, GradeScaleRange, ScaleType


@pytest.fixture
def letter_scale() -> GradeScale:
    """Provide a small A-F letter scale over percentages."""
    return GradeScale(
        id=1,
        name="Letters",
        scale_type=ScaleType.LETTER,
        ranges=(
            GradeScaleRange(90, 100, "A", "Excellent", "#10B981", 4.0, True, 0),
            GradeScaleRange(80, 89.99, "B", "Good", "#3B82F6", 3.0, True, 1),
            GradeScaleRange(70, 79.99, "C", "Fair", "#F59E0B", 2.0, True, 2),
            GradeScaleRange(60, 69.99, "D", "Poor", "#FB923C", 1.0, True, 3),
            GradeScaleRange(0, 59.99, "F", "Failing", "#EF4444", 0.0, False, 4),
        ),
    )


@pytest.fixture
def percentage_scale() -> GradeScale:
    """Provide a percentage scale with 0-100 breakpoints."""
    return GradeScale(
        id=2,
        name="Percent",
        scale_type=ScaleType.PERCENTAGE,
        ranges=(
            GradeScaleRange(80, 100, "High", gpa_equivalent=4.0, order=0),
            GradeScaleRange(50, 79.99, "Mid", gpa_equivalent=2.5, order=1),
            GradeScaleRange(0, 49.99, "Low", gpa_equivalent=0.0, is_passing=False, order=2),
        ),
    )


@pytest.fixture
def points_scale() -> GradeScale:
    """Provide a 0-20 points scale."""
    return GradeScale(
        id=3,
        name="Points 0-20",
        scale_type=ScaleType.POINTS,
        ranges=(
            GradeScaleRange(16, 20, "16-20", gpa_equivalent=4.0, order=0),
            GradeScaleRange(10, 15.99, "10-15", gpa_equivalent=2.5, order=1),
            GradeScaleRange(0, 9.99, "0-9", gpa_equivalent=0.0, is_passing=False, order=2),
        ),
    )
