"""
Value objects for grade scales and conversion results.

A GradeScale owns an ordered tuple of GradeScaleRange entries. Ranges keep the
order they were supplied in; lookups test every range independently, so the
order only matters for display and for resolving a value shared by two
touching ranges.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MAX_LABEL_LENGTH = 10
MAX_COLOR_LENGTH = 7
MIN_GPA_EQUIVALENT = 0.0
MAX_GPA_EQUIVALENT = 4.0

OUT_OF_RANGE_MESSAGE = "Score out of range"


class ScaleType(str, Enum):
    """How raw scores on a scale are expressed."""

    LETTER = "letter"
    PERCENTAGE = "percentage"
    POINTS = "points"
    STANDARDS = "standards"


@dataclass(frozen=True)
class GradeScaleRange:
    """
    A closed score interval mapped to a grade label.

    Attributes:
        min_value: Inclusive lower bound
        max_value: Inclusive upper bound
        display_label: Short label shown to users (e.g., "A", "B+", "18-20")
        description: Optional descriptive text (e.g., "Excellent")
        color: Optional display color hint (e.g., "#10B981")
        gpa_equivalent: Grade points on a 0.0-4.0 scale, or None when not counted in GPA
        is_passing: Whether a score in this range is a pass
        order: Display order within the scale
        id: Storage identifier, None until persisted
    """

    min_value: float
    max_value: float
    display_label: str
    description: str | None = None
    color: str | None = None
    gpa_equivalent: float | None = None
    is_passing: bool = True
    order: int = 0
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate range bounds and display attributes."""
        if self.min_value > self.max_value:
            msg = (
                f"min_value ({self.min_value}) must not exceed max_value ({self.max_value}) "
                f"for range '{self.display_label}'"
            )
            raise ValueError(msg)
        if not self.display_label:
            msg = "display_label cannot be empty"
            raise ValueError(msg)
        if len(self.display_label) > MAX_LABEL_LENGTH:
            msg = (
                f"display_label must be at most {MAX_LABEL_LENGTH} characters: "
                f"{self.display_label!r}"
            )
            raise ValueError(msg)
        if self.color is not None and len(self.color) > MAX_COLOR_LENGTH:
            msg = f"color must be at most {MAX_COLOR_LENGTH} characters: {self.color!r}"
            raise ValueError(msg)
        if self.gpa_equivalent is not None and not (
            MIN_GPA_EQUIVALENT <= self.gpa_equivalent <= MAX_GPA_EQUIVALENT
        ):
            msg = (
                f"gpa_equivalent must be between {MIN_GPA_EQUIVALENT} and "
                f"{MAX_GPA_EQUIVALENT}, got {self.gpa_equivalent}"
            )
            raise ValueError(msg)

    @property
    def midpoint(self) -> float:
        return (self.min_value + self.max_value) / 2

    def contains(self, value: float) -> bool:
        return self.min_value <= value <= self.max_value


@dataclass(frozen=True)
class GradeScale:
    """
    A named, typed collection of ranges.

    The scope of a scale is its (grading_system_id, school_id) pair; at most one
    scale per scope is flagged as default.
    """

    name: str
    scale_type: ScaleType
    ranges: tuple[GradeScaleRange, ...] = ()
    is_default: bool = False
    grading_system_id: int | None = None
    school_id: int | None = None
    tenant_id: int | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            msg = "name cannot be empty"
            raise ValueError(msg)
        # Accept any iterable of ranges but store an immutable tuple
        if not isinstance(self.ranges, tuple):
            object.__setattr__(self, "ranges", tuple(self.ranges))
        if not isinstance(self.scale_type, ScaleType):
            object.__setattr__(self, "scale_type", ScaleType(self.scale_type))

    @property
    def scope(self) -> tuple[int | None, int | None]:
        return (self.grading_system_id, self.school_id)

    @property
    def ordered_ranges(self) -> list[GradeScaleRange]:
        """Ranges in display order."""
        return sorted(self.ranges, key=lambda r: (r.order, r.min_value))

    @property
    def max_value(self) -> float | None:
        if not self.ranges:
            return None
        return max(r.max_value for r in self.ranges)


@dataclass(frozen=True)
class GradeInput:
    """A score and its weight in a GPA calculation."""

    score: float
    weight: float = 1.0

    def __post_init__(self) -> None:
        if self.weight < 0:
            msg = f"weight must be non-negative, got {self.weight}"
            raise ValueError(msg)


@dataclass(frozen=True)
class GradeResult:
    """The grade information of the range a score fell into."""

    label: str
    description: str | None
    color: str | None
    gpa_equivalent: float | None
    is_passing: bool

    @classmethod
    def from_range(cls, grade_range: GradeScaleRange) -> GradeResult:
        return cls(
            label=grade_range.display_label,
            description=grade_range.description,
            color=grade_range.color,
            gpa_equivalent=grade_range.gpa_equivalent,
            is_passing=grade_range.is_passing,
        )


@dataclass(frozen=True)
class ScoreReport:
    """Outcome of converting one score, including the out-of-range case."""

    original_score: float
    scale_name: str
    scale_type: ScaleType
    grade: GradeResult | None
    is_passing: bool
    error: str | None = None

    @property
    def out_of_range(self) -> bool:
        return self.grade is None


@dataclass(frozen=True)
class CrossScaleConversion:
    """Result of converting a score between two scales via a percentage."""

    from_scale: str
    from_score: float | str
    percentage: float
    to_scale: str
    to_grade: GradeResult | None = None
