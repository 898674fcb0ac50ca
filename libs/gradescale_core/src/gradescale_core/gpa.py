"""Weighted aggregation of grades into a GPA or an average percentage."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from .conversion import get_gpa_equivalent
from .scale_models import GradeInput, GradeScale


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a report card does: 2.345 -> 2.35."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_gpa(grades: Iterable[GradeInput], scale: GradeScale) -> float:
    """
    Calculate a weighted GPA for a list of grades read on one scale.

    Grades whose score is out of range, or whose range has no gpa_equivalent,
    are left out of both the weighted sum and the weight total.

    Args:
        grades: Scores with their weights
        scale: Scale used to look up each score's gpa_equivalent

    Returns:
        Weighted GPA rounded to 2 decimals, or 0.0 if no grade contributed
    """
    total_points = 0.0
    total_weight = 0.0

    for grade in grades:
        gpa = get_gpa_equivalent(grade.score, scale)
        if gpa is None:
            continue
        total_points += gpa * grade.weight
        total_weight += grade.weight

    if total_weight <= 0:
        return 0.0
    return round_half_up(total_points / total_weight)


def calculate_weighted_average(grades: Iterable[GradeInput]) -> float:
    """
    Weighted mean of percentage scores.

    A weight of zero counts as 1, so unweighted entries still contribute.
    Returns 0.0 for an empty input.
    """
    total_marks = 0.0
    total_weight = 0.0

    for grade in grades:
        weight = grade.weight or 1.0
        total_marks += grade.score * weight
        total_weight += weight

    if total_weight <= 0:
        return 0.0
    return round_half_up(total_marks / total_weight)
