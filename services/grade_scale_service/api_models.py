from __future__ import annotations

from gradescale_core.scale_models import GradeInput, GradeScaleRange, ScaleType
from pydantic import BaseModel, Field, model_validator

# ====================================================================
# Request Models
# ====================================================================


class GradeScaleRangeRequest(BaseModel):
    min_value: float
    max_value: float
    display_label: str = Field(..., min_length=1, max_length=10)
    description: str | None = Field(None, max_length=255)
    color: str | None = Field(None, max_length=7)
    gpa_equivalent: float | None = Field(None, ge=0, le=4)
    is_passing: bool = True
    order: int | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> GradeScaleRangeRequest:
        if self.max_value < self.min_value:
            raise ValueError("max_value must be greater than or equal to min_value")
        return self

    def to_domain(self, default_order: int = 0) -> GradeScaleRange:
        return GradeScaleRange(
            min_value=self.min_value,
            max_value=self.max_value,
            display_label=self.display_label,
            description=self.description,
            color=self.color,
            gpa_equivalent=self.gpa_equivalent,
            is_passing=self.is_passing,
            order=self.order if self.order is not None else default_order,
        )


def ranges_to_domain(ranges: list[GradeScaleRangeRequest]) -> list[GradeScaleRange]:
    """Convert range requests, defaulting each missing order to its list position."""
    return [r.to_domain(default_order=index) for index, r in enumerate(ranges)]


class CreateGradeScaleRequest(BaseModel):
    grading_system_id: int
    school_id: int
    tenant_id: int
    name: str = Field(..., min_length=1, max_length=255)
    scale_type: ScaleType
    is_default: bool = False
    ranges: list[GradeScaleRangeRequest] = Field(default_factory=list)


class UpdateGradeScaleRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    scale_type: ScaleType | None = None
    is_default: bool | None = None


class GradeEntryRequest(BaseModel):
    score: float
    weight: float = Field(1.0, ge=0)

    def to_domain(self) -> GradeInput:
        return GradeInput(score=self.score, weight=self.weight)


class CalculateGpaRequest(BaseModel):
    grades: list[GradeEntryRequest] = Field(default_factory=list)

    def to_domain(self) -> list[GradeInput]:
        return [grade.to_domain() for grade in self.grades]
