"""
Built-in grade scale presets.

Provides ready-made definitions for the scales most schools start from
(0-20 points, A-F letters, 0-100 percent, 0-10 points). A preset is a template:
build_scale_from_preset() stamps it into a concrete GradeScale for one scope.
"""

from __future__ import annotations

from dataclasses import dataclass

from .range_validation import validate_ranges
from .scale_models import GradeScale, GradeScaleRange, ScaleType


@dataclass(frozen=True)
class GradeScalePreset:
    """
    Template for a grade scale.

    Attributes:
        preset_id: Unique identifier for the preset (e.g., "letter_a_f")
        name: Scale name given to scales built from this preset
        scale_type: Type of the resulting scale
        ranges: Range definitions, highest band first
        description: Purpose and context of this preset
    """

    preset_id: str
    name: str
    scale_type: ScaleType
    ranges: tuple[GradeScaleRange, ...]
    description: str

    def __post_init__(self) -> None:
        """Validate preset definition."""
        if not self.preset_id:
            msg = "preset_id cannot be empty"
            raise ValueError(msg)
        if not self.ranges:
            msg = "ranges cannot be empty"
            raise ValueError(msg)

        labels = [r.display_label for r in self.ranges]
        if len(labels) != len(set(labels)):
            msg = f"range labels must be unique: {labels}"
            raise ValueError(msg)

        violations = validate_ranges(self.ranges)
        if violations:
            msg = f"preset '{self.preset_id}' has overlapping ranges: {violations}"
            raise ValueError(msg)


def _ranges(
    rows: list[tuple[float, float, str, str, str, float, bool]],
) -> tuple[GradeScaleRange, ...]:
    return tuple(
        GradeScaleRange(
            min_value=min_value,
            max_value=max_value,
            display_label=label,
            description=description,
            color=color,
            gpa_equivalent=gpa,
            is_passing=passing,
            order=index,
        )
        for index, (min_value, max_value, label, description, color, gpa, passing) in enumerate(
            rows
        )
    )


# 0-20 points scale (Portuguese system)
_POINTS_0_20 = GradeScalePreset(
    preset_id="points_0_20",
    name="Scale 0-20",
    scale_type=ScaleType.POINTS,
    ranges=_ranges(
        [
            (18, 20, "18-20", "Excellent", "#10B981", 4.0, True),
            (16, 17.99, "16-17", "Very Good", "#3B82F6", 3.7, True),
            (14, 15.99, "14-15", "Good", "#06B6D4", 3.3, True),
            (12, 13.99, "12-13", "Sufficient", "#F59E0B", 3.0, True),
            (10, 11.99, "10-11", "Satisfactory", "#FBBF24", 2.0, True),
            (0, 9.99, "0-9", "Insufficient", "#EF4444", 0.0, False),
        ]
    ),
    description="Points from 0 to 20; 10 and above is a pass.",
)

# A-F letter scale (US system)
_LETTER_A_F = GradeScalePreset(
    preset_id="letter_a_f",
    name="Scale A-F",
    scale_type=ScaleType.LETTER,
    ranges=_ranges(
        [
            (93, 100, "A", "Excellent", "#10B981", 4.0, True),
            (90, 92.99, "A-", "Very Good", "#22C55E", 3.7, True),
            (87, 89.99, "B+", "Good+", "#3B82F6", 3.3, True),
            (83, 86.99, "B", "Good", "#06B6D4", 3.0, True),
            (80, 82.99, "B-", "Good-", "#0EA5E9", 2.7, True),
            (77, 79.99, "C+", "Satisfactory+", "#F59E0B", 2.3, True),
            (73, 76.99, "C", "Satisfactory", "#FBBF24", 2.0, True),
            (70, 72.99, "C-", "Satisfactory-", "#FCD34D", 1.7, True),
            (67, 69.99, "D+", "Sufficient+", "#FB923C", 1.3, True),
            (63, 66.99, "D", "Sufficient", "#F97316", 1.0, True),
            (60, 62.99, "D-", "Sufficient-", "#EA580C", 0.7, True),
            (0, 59.99, "F", "Insufficient", "#EF4444", 0.0, False),
        ]
    ),
    description=(
        "Letter grades with plus/minus modifiers over percentage bands. "
        "Letter scores are converted to other scales via the band midpoint."
    ),
)

# 0-100 percentage scale
_PERCENTAGE_0_100 = GradeScalePreset(
    preset_id="percentage_0_100",
    name="Scale 0-100%",
    scale_type=ScaleType.PERCENTAGE,
    ranges=_ranges(
        [
            (90, 100, "90-100%", "Excellent", "#10B981", 4.0, True),
            (80, 89.99, "80-89%", "Very Good", "#3B82F6", 3.5, True),
            (70, 79.99, "70-79%", "Good", "#06B6D4", 3.0, True),
            (60, 69.99, "60-69%", "Satisfactory", "#F59E0B", 2.5, True),
            (50, 59.99, "50-59%", "Sufficient", "#FBBF24", 2.0, True),
            (0, 49.99, "0-49%", "Insufficient", "#EF4444", 0.0, False),
        ]
    ),
    description="Plain percentage bands; 50% and above is a pass.",
)

# 0-10 points scale (Brazilian system)
_POINTS_0_10 = GradeScalePreset(
    preset_id="points_0_10",
    name="Scale 0-10",
    scale_type=ScaleType.POINTS,
    ranges=_ranges(
        [
            (9, 10, "9-10", "Excellent", "#10B981", 4.0, True),
            (8, 8.99, "8-8.9", "Great", "#22C55E", 3.7, True),
            (7, 7.99, "7-7.9", "Good", "#3B82F6", 3.3, True),
            (6, 6.99, "6-6.9", "Satisfactory", "#F59E0B", 3.0, True),
            (5, 5.99, "5-5.9", "Sufficient", "#FBBF24", 2.0, True),
            (0, 4.99, "0-4.9", "Insufficient", "#EF4444", 0.0, False),
        ]
    ),
    description="Points from 0 to 10; 5 and above is a pass.",
)

# Registry mapping preset_id to preset, in seeding order
PRESET_SCALES: dict[str, GradeScalePreset] = {
    _POINTS_0_20.preset_id: _POINTS_0_20,
    _LETTER_A_F.preset_id: _LETTER_A_F,
    _PERCENTAGE_0_100.preset_id: _PERCENTAGE_0_100,
    _POINTS_0_10.preset_id: _POINTS_0_10,
}

DEFAULT_PRESET_ID = _POINTS_0_20.preset_id


def get_preset(preset_id: str) -> GradeScalePreset:
    """
    Retrieve a preset by ID.

    Raises:
        ValueError: If preset_id is not registered
    """
    if preset_id not in PRESET_SCALES:
        available = ", ".join(sorted(PRESET_SCALES.keys()))
        msg = f"Unknown grade scale preset '{preset_id}'. Available presets: {available}"
        raise ValueError(msg)
    return PRESET_SCALES[preset_id]


def list_available_presets() -> list[str]:
    """
    Get list of all registered preset IDs.

    Returns:
        Sorted list of preset identifiers
    """
    return sorted(PRESET_SCALES.keys())


def build_scale_from_preset(
    preset_id: str,
    grading_system_id: int | None = None,
    school_id: int | None = None,
    tenant_id: int | None = None,
    is_default: bool = False,
) -> GradeScale:
    """
    Build an unsaved GradeScale from a preset for the given scope.

    Raises:
        ValueError: If preset_id is not registered
    """
    preset = get_preset(preset_id)
    return GradeScale(
        name=preset.name,
        scale_type=preset.scale_type,
        ranges=preset.ranges,
        is_default=is_default,
        grading_system_id=grading_system_id,
        school_id=school_id,
        tenant_id=tenant_id,
    )
