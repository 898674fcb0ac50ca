from __future__ import annotations

from typing import Protocol

from gradescale_core.scale_models import (
    CrossScaleConversion,
    GradeScale,
    GradeScaleRange,
    ScaleType,
    ScoreReport,
)

from services.grade_scale_service.api_models import (
    CalculateGpaRequest,
    CreateGradeScaleRequest,
    GradeScaleRangeRequest,
    UpdateGradeScaleRequest,
)


class GradeScaleRepositoryProtocol(Protocol):
    """Protocol for grade scale and range persistence operations.

    Implementations return engine value objects, never ORM instances. Each
    write runs as one atomic unit.
    """

    async def create_scale(self, scale: GradeScale) -> GradeScale:
        """Persist a scale with its ranges; a default scale clears its siblings' flags."""
        ...

    async def get_scale_by_id(self, scale_id: int) -> GradeScale | None: ...

    async def find_scale_by_name(
        self, grading_system_id: int | None, school_id: int | None, name: str
    ) -> GradeScale | None: ...

    async def list_scales_for_system(self, grading_system_id: int) -> list[GradeScale]:
        """Return the system's scales, default first, then by name."""
        ...

    async def update_scale(
        self,
        scale_id: int,
        *,
        name: str | None = None,
        scale_type: ScaleType | None = None,
        is_default: bool | None = None,
    ) -> GradeScale | None: ...

    async def delete_scale(self, scale_id: int) -> bool:
        """Delete an unreferenced, non-default scale; False when it does not exist.

        Raises DefaultScaleDeletionError or ScaleInUseError when the guards fail
        inside the deleting transaction.
        """
        ...

    async def set_default(self, scale_id: int) -> GradeScale | None:
        """Flag the scale as default and clear the flag on every scope sibling."""
        ...

    async def get_default_scale(self, school_id: int, tenant_id: int) -> GradeScale | None:
        """Return the default scale; the lowest id wins if several are flagged."""
        ...

    async def upsert_range(
        self, scale_id: int, grade_range: GradeScaleRange, range_id: int | None = None
    ) -> GradeScaleRange | None:
        """Add or edit a range; raises InvalidRangeSetError if it overlaps stored ranges."""
        ...

    async def delete_range(self, range_id: int) -> bool: ...

    async def replace_ranges(
        self, scale_id: int, ranges: list[GradeScaleRange]
    ) -> GradeScale | None: ...

    async def count_grade_references(self, scale_id: int) -> int: ...


class GradeScaleServiceProtocol(Protocol):
    """Protocol for grade scale administration and grade computation."""

    async def create_grade_scale(self, request: CreateGradeScaleRequest) -> GradeScale: ...

    async def update_grade_scale(
        self, scale_id: int, request: UpdateGradeScaleRequest
    ) -> GradeScale: ...

    async def set_default(self, scale_id: int) -> GradeScale: ...

    async def delete_grade_scale(self, scale_id: int) -> None: ...

    async def duplicate_grade_scale(self, scale_id: int, new_name: str) -> GradeScale: ...

    async def get_grade_scale(self, scale_id: int) -> GradeScale: ...

    async def list_scales_for_system(self, grading_system_id: int) -> list[GradeScale]: ...

    async def get_default_scale(self, school_id: int, tenant_id: int) -> GradeScale | None: ...

    async def upsert_range(
        self, scale_id: int, request: GradeScaleRangeRequest, range_id: int | None = None
    ) -> GradeScaleRange: ...

    async def delete_range(self, scale_id: int, range_id: int) -> None: ...

    async def replace_ranges(
        self, scale_id: int, requests: list[GradeScaleRangeRequest]
    ) -> GradeScale: ...

    async def convert_score(self, score: float, scale_id: int) -> ScoreReport: ...

    async def convert_between_scales(
        self, score: float | str, from_scale_id: int, to_scale_id: int
    ) -> CrossScaleConversion: ...

    async def calculate_gpa(self, request: CalculateGpaRequest, scale_id: int) -> float: ...

    async def label_for_default_scale(
        self, school_id: int, tenant_id: int, percentage: float
    ) -> str | None: ...

    async def seed_preset_scales(
        self, grading_system_id: int, school_id: int, tenant_id: int
    ) -> list[GradeScale]: ...
