"""Overlap detection for a candidate set of ranges."""

from __future__ import annotations

from collections.abc import Iterable

from .scale_models import GradeScaleRange


def validate_ranges(ranges: Iterable[GradeScaleRange]) -> list[str]:
    """
    Check that no two ranges overlap.

    Ranges are sorted by min_value and each adjacent pair is compared. A pair
    overlaps when the lower range's max_value is strictly greater than the next
    range's min_value, so ranges that merely touch (max == next min) pass.

    Args:
        ranges: Candidate ranges in any order

    Returns:
        Human-readable violation messages; an empty list means the set is valid
    """
    ordered = sorted(ranges, key=lambda r: r.min_value)
    errors: list[str] = []

    for current, following in zip(ordered, ordered[1:]):
        if current.max_value > following.min_value:
            errors.append(
                "Range overlap detected between "
                f"{current.display_label} and {following.display_label}"
            )

    return errors
