from __future__ import annotations

import asyncio
from collections import defaultdict
from dataclasses import replace

from gradescale_core.defaults import apply_default, conflicting_default_ids, pick_default_scale
from gradescale_core.range_validation import validate_ranges
from gradescale_core.scale_models import GradeScale, GradeScaleRange, ScaleType
from gradescale_service_libs.logging_utils import create_service_logger

from services.grade_scale_service.exceptions import (
    DefaultScaleDeletionError,
    InvalidRangeSetError,
    ScaleInUseError,
)
from services.grade_scale_service.protocols import GradeScaleRepositoryProtocol

logger = create_service_logger("grade_scale_service.repository.mock")


class MockGradeScaleRepositoryImpl(GradeScaleRepositoryProtocol):
    """In-memory implementation of GradeScaleRepositoryProtocol for testing."""

    def __init__(self) -> None:
        self.scales: dict[int, GradeScale] = {}
        self.grade_references: dict[int, int] = defaultdict(int)
        self._next_scale_id = 1
        self._next_range_id = 1
        self._lock = asyncio.Lock()

    def add_grade_reference(self, scale_id: int, count: int = 1) -> None:
        """Record grades read on a scale, as the grade entry path would."""
        self.grade_references[scale_id] += count

    def _with_range_ids(self, ranges: tuple[GradeScaleRange, ...]) -> tuple[GradeScaleRange, ...]:
        assigned = []
        for grade_range in ranges:
            assigned.append(replace(grade_range, id=self._next_range_id))
            self._next_range_id += 1
        return tuple(assigned)

    def _apply_default(self, scale_id: int) -> None:
        for scale in apply_default(list(self.scales.values()), scale_id):
            self.scales[scale.id] = scale  # type: ignore[index]

    async def create_scale(self, scale: GradeScale) -> GradeScale:
        async with self._lock:
            scale_id = self._next_scale_id
            self._next_scale_id += 1
            self.scales[scale_id] = replace(
                scale, id=scale_id, ranges=self._with_range_ids(scale.ranges)
            )
            if scale.is_default:
                self._apply_default(scale_id)
            return self.scales[scale_id]

    async def get_scale_by_id(self, scale_id: int) -> GradeScale | None:
        return self.scales.get(scale_id)

    async def find_scale_by_name(
        self, grading_system_id: int | None, school_id: int | None, name: str
    ) -> GradeScale | None:
        for scale in sorted(self.scales.values(), key=lambda s: s.id or 0):
            if scale.scope == (grading_system_id, school_id) and scale.name == name:
                return scale
        return None

    async def list_scales_for_system(self, grading_system_id: int) -> list[GradeScale]:
        scales = [s for s in self.scales.values() if s.grading_system_id == grading_system_id]
        return sorted(scales, key=lambda s: (not s.is_default, s.name))

    async def update_scale(
        self,
        scale_id: int,
        *,
        name: str | None = None,
        scale_type: ScaleType | None = None,
        is_default: bool | None = None,
    ) -> GradeScale | None:
        async with self._lock:
            scale = self.scales.get(scale_id)
            if scale is None:
                return None

            if name is not None:
                scale = replace(scale, name=name)
            if scale_type is not None:
                scale = replace(scale, scale_type=scale_type)
            if is_default is False:
                scale = replace(scale, is_default=False)
            self.scales[scale_id] = scale
            if is_default is True:
                self._apply_default(scale_id)
            return self.scales[scale_id]

    async def delete_scale(self, scale_id: int) -> bool:
        async with self._lock:
            scale = self.scales.get(scale_id)
            if scale is None:
                return False
            if scale.is_default:
                raise DefaultScaleDeletionError(scale_id)
            reference_count = self.grade_references.get(scale_id, 0)
            if reference_count > 0:
                raise ScaleInUseError(scale_id, reference_count)
            del self.scales[scale_id]
            return True

    async def set_default(self, scale_id: int) -> GradeScale | None:
        async with self._lock:
            if scale_id not in self.scales:
                return None
            self._apply_default(scale_id)
            return self.scales[scale_id]

    async def get_default_scale(self, school_id: int, tenant_id: int) -> GradeScale | None:
        candidates = [
            s
            for s in self.scales.values()
            if s.school_id == school_id and s.tenant_id == tenant_id and s.is_default
        ]
        conflicting = conflicting_default_ids(candidates)
        if conflicting:
            logger.warning(
                "Multiple default grade scales in one grading system, using lowest id",
                school_id=school_id,
                tenant_id=tenant_id,
                scale_ids=conflicting,
            )
        return pick_default_scale(candidates)

    async def upsert_range(
        self, scale_id: int, grade_range: GradeScaleRange, range_id: int | None = None
    ) -> GradeScaleRange | None:
        async with self._lock:
            scale = self.scales.get(scale_id)
            if scale is None:
                return None

            if range_id is not None and not any(r.id == range_id for r in scale.ranges):
                return None
            siblings = [r for r in scale.ranges if r.id != range_id]
            violations = validate_ranges([*siblings, grade_range])
            if violations:
                raise InvalidRangeSetError(violations)

            if range_id is None:
                saved = self._with_range_ids((grade_range,))[0]
                ranges = (*scale.ranges, saved)
            else:
                saved = replace(grade_range, id=range_id)
                ranges = tuple(saved if r.id == range_id else r for r in scale.ranges)

            self.scales[scale_id] = replace(scale, ranges=ranges)
            return saved

    async def delete_range(self, range_id: int) -> bool:
        async with self._lock:
            for scale_id, scale in self.scales.items():
                remaining = tuple(r for r in scale.ranges if r.id != range_id)
                if len(remaining) != len(scale.ranges):
                    self.scales[scale_id] = replace(scale, ranges=remaining)
                    return True
            return False

    async def replace_ranges(
        self, scale_id: int, ranges: list[GradeScaleRange]
    ) -> GradeScale | None:
        async with self._lock:
            scale = self.scales.get(scale_id)
            if scale is None:
                return None
            self.scales[scale_id] = replace(scale, ranges=self._with_range_ids(tuple(ranges)))
            return self.scales[scale_id]

    async def count_grade_references(self, scale_id: int) -> int:
        return self.grade_references.get(scale_id, 0)
