"""
Grade scale and GPA engine.

Pure functions over immutable value objects: score-to-grade lookup, range set
validation, cross-scale conversion, weighted GPA and default scale selection.
Loading and persisting scales is left to the calling service.
"""

from .conversion import (
    convert_between_scales,
    convert_score_to_grade,
    describe_score,
    find_matching_range,
    get_gpa_equivalent,
    get_grade_label,
    get_minimum_passing_score,
    get_passing_grades,
    is_passing,
    label_for_percentage,
    normalize_to_percentage,
    percentage_to_scale_units,
)
from .defaults import (
    apply_default,
    conflicting_default_ids,
    count_defaults,
    pick_default_scale,
)
from .error_enums import ErrorCode, GradeScaleErrorCode
from .exceptions import GradeScaleValidationError, InvalidScaleError, UnsupportedScaleTypeError
from .gpa import calculate_gpa, calculate_weighted_average
from .presets import (
    PRESET_SCALES,
    GradeScalePreset,
    build_scale_from_preset,
    get_preset,
    list_available_presets,
)
from .range_validation import validate_ranges
from .scale_models import (
    CrossScaleConversion,
    GradeInput,
    GradeResult,
    GradeScale,
    GradeScaleRange,
    ScaleType,
    ScoreReport,
)

__all__ = [
    "PRESET_SCALES",
    "CrossScaleConversion",
    "ErrorCode",
    "GradeInput",
    "GradeResult",
    "GradeScale",
    "GradeScaleErrorCode",
    "GradeScalePreset",
    "GradeScaleRange",
    "GradeScaleValidationError",
    "InvalidScaleError",
    "ScaleType",
    "ScoreReport",
    "UnsupportedScaleTypeError",
    "apply_default",
    "build_scale_from_preset",
    "calculate_gpa",
    "calculate_weighted_average",
    "conflicting_default_ids",
    "convert_between_scales",
    "convert_score_to_grade",
    "count_defaults",
    "describe_score",
    "find_matching_range",
    "get_gpa_equivalent",
    "get_grade_label",
    "get_minimum_passing_score",
    "get_passing_grades",
    "get_preset",
    "is_passing",
    "label_for_percentage",
    "list_available_presets",
    "normalize_to_percentage",
    "percentage_to_scale_units",
    "pick_default_scale",
    "validate_ranges",
]
