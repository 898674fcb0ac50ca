"""
Score conversion against a single grade scale and across two scales.

Lookups return None for a score that no range contains; callers decide whether
that is a user-facing error or simply "ungraded". Only malformed scales raise.
"""

from __future__ import annotations

from .exceptions import InvalidScaleError, UnsupportedScaleTypeError
from .scale_models import (
    OUT_OF_RANGE_MESSAGE,
    CrossScaleConversion,
    GradeResult,
    GradeScale,
    GradeScaleRange,
    ScaleType,
    ScoreReport,
)


def _require_ranges(scale: GradeScale) -> None:
    if not scale.ranges:
        msg = f"Grade scale '{scale.name}' has no ranges"
        raise InvalidScaleError(msg, scale_name=scale.name)


def _find_range(value: float, scale: GradeScale) -> GradeScaleRange | None:
    for grade_range in scale.ranges:
        if grade_range.contains(value):
            return grade_range
    return None


def find_matching_range(score: float, scale: GradeScale) -> GradeScaleRange | None:
    """
    Return the first range of the scale whose [min_value, max_value] contains score.

    Raises:
        InvalidScaleError: If the scale has no ranges
    """
    _require_ranges(scale)
    return _find_range(score, scale)


def convert_score_to_grade(score: float, scale: GradeScale) -> GradeResult | None:
    """
    Convert a numeric score to the grade of the range it falls into.

    Args:
        score: Raw score, expressed in the scale's own units
        scale: Scale with at least one range

    Returns:
        GradeResult for the matching range, or None when the score is out of range

    Raises:
        InvalidScaleError: If the scale has no ranges
    """
    grade_range = find_matching_range(score, scale)
    if grade_range is None:
        return None
    return GradeResult.from_range(grade_range)


def get_grade_label(score: float, scale: GradeScale) -> str | None:
    """Get the label for a score, or None when out of range."""
    grade = convert_score_to_grade(score, scale)
    return grade.label if grade else None


def get_gpa_equivalent(score: float, scale: GradeScale) -> float | None:
    grade = convert_score_to_grade(score, scale)
    return grade.gpa_equivalent if grade else None


def is_passing(score: float, scale: GradeScale) -> bool:
    """Check if a score is passing; out-of-range scores never pass."""
    grade = convert_score_to_grade(score, scale)
    return grade.is_passing if grade else False


def describe_score(score: float, scale: GradeScale) -> ScoreReport:
    """Convert a score and package the outcome with the scale it was read on."""
    grade = convert_score_to_grade(score, scale)
    if grade is None:
        return ScoreReport(
            original_score=score,
            scale_name=scale.name,
            scale_type=scale.scale_type,
            grade=None,
            is_passing=False,
            error=OUT_OF_RANGE_MESSAGE,
        )
    return ScoreReport(
        original_score=score,
        scale_name=scale.name,
        scale_type=scale.scale_type,
        grade=grade,
        is_passing=grade.is_passing,
    )


def get_passing_grades(scale: GradeScale) -> list[str]:
    """Labels of all passing ranges, in display order."""
    return [r.display_label for r in scale.ordered_ranges if r.is_passing]


def get_minimum_passing_score(scale: GradeScale) -> float | None:
    passing = [r.min_value for r in scale.ranges if r.is_passing]
    return min(passing) if passing else None


def _positive_max_points(scale: GradeScale) -> float:
    max_points = scale.max_value
    if max_points is None or max_points <= 0:
        msg = f"Points scale '{scale.name}' needs a positive maximum to convert scores"
        raise InvalidScaleError(msg, scale_name=scale.name)
    return max_points


def normalize_to_percentage(score: float | str, scale: GradeScale) -> float:
    """
    Express a score on the given scale as a 0-100 percentage.

    Percentage scales pass the score through. Points scales divide by the
    largest max_value of the scale. Letter scales treat the score as a label and
    use the midpoint of the range carrying that label; an unknown label yields 0.

    Raises:
        InvalidScaleError: If a points scale has no ranges or a non-positive maximum
        UnsupportedScaleTypeError: For scale types without a normalization rule
    """
    if scale.scale_type is ScaleType.PERCENTAGE:
        return float(score)

    if scale.scale_type is ScaleType.POINTS:
        return (float(score) / _positive_max_points(scale)) * 100

    if scale.scale_type is ScaleType.LETTER:
        label = str(score)
        for grade_range in scale.ranges:
            if grade_range.display_label == label:
                return grade_range.midpoint
        return 0.0

    raise UnsupportedScaleTypeError(scale.scale_type.value)


def percentage_to_scale_units(percentage: float, scale: GradeScale) -> float:
    """
    Express a 0-100 percentage in the units the scale's ranges are defined in.

    Points scales scale the percentage onto their largest max_value. Percentage
    and letter scales define their ranges over percentages, so the value is
    returned unchanged.

    Raises:
        InvalidScaleError: If a points scale has no ranges or a non-positive maximum
        UnsupportedScaleTypeError: For scale types without a conversion rule
    """
    if scale.scale_type is ScaleType.POINTS:
        return (percentage / 100) * _positive_max_points(scale)

    if scale.scale_type in (ScaleType.PERCENTAGE, ScaleType.LETTER):
        return float(percentage)

    raise UnsupportedScaleTypeError(scale.scale_type.value)


def label_for_percentage(percentage: float, scale: GradeScale) -> str | None:
    """Label a percentage on any supported scale, or None when out of range."""
    return get_grade_label(percentage_to_scale_units(percentage, scale), scale)


def convert_between_scales(
    score: float | str, from_scale: GradeScale, to_scale: GradeScale
) -> CrossScaleConversion:
    """
    Convert a score from one scale to the grade it corresponds to on another.

    The score is first normalized to a percentage on from_scale, then looked up
    directly against to_scale's ranges.

    Raises:
        InvalidScaleError: If to_scale has no ranges, or from_scale cannot normalize
        UnsupportedScaleTypeError: If from_scale's type has no normalization rule
    """
    _require_ranges(to_scale)
    percentage = normalize_to_percentage(score, from_scale)
    grade_range = _find_range(percentage, to_scale)

    return CrossScaleConversion(
        from_scale=from_scale.name,
        from_score=score,
        percentage=percentage,
        to_scale=to_scale.name,
        to_grade=GradeResult.from_range(grade_range) if grade_range else None,
    )
