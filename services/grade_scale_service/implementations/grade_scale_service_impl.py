from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from gradescale_core.conversion import convert_between_scales as convert_across_scales
from gradescale_core.conversion import describe_score, label_for_percentage
from gradescale_core.exceptions import UnsupportedScaleTypeError
from gradescale_core.gpa import calculate_gpa as compute_gpa
from gradescale_core.presets import (
    DEFAULT_PRESET_ID,
    build_scale_from_preset,
    get_preset,
    list_available_presets,
)
from gradescale_core.range_validation import validate_ranges
from gradescale_core.scale_models import (
    CrossScaleConversion,
    GradeScale,
    GradeScaleRange,
    ScoreReport,
)
from gradescale_service_libs.logging_utils import create_service_logger, log_scale_operation

from services.grade_scale_service.api_models import (
    CalculateGpaRequest,
    CreateGradeScaleRequest,
    GradeScaleRangeRequest,
    UpdateGradeScaleRequest,
    ranges_to_domain,
)
from services.grade_scale_service.exceptions import (
    DefaultScaleDeletionError,
    DuplicateScaleNameError,
    InvalidRangeSetError,
    RangeNotFoundError,
    ScaleInUseError,
    ScaleNotFoundError,
)
from services.grade_scale_service.protocols import (
    GradeScaleRepositoryProtocol,
    GradeScaleServiceProtocol,
)

logger = create_service_logger("grade_scale_service.service")


def _check_range_set(ranges: Iterable[GradeScaleRange]) -> None:
    violations = validate_ranges(ranges)
    if violations:
        raise InvalidRangeSetError(violations)


class GradeScaleServiceImpl(GradeScaleServiceProtocol):
    """Implementation of the grade scale service logic."""

    def __init__(self, repo: GradeScaleRepositoryProtocol) -> None:
        self.repo = repo

    async def _require_scale(self, scale_id: int) -> GradeScale:
        scale = await self.repo.get_scale_by_id(scale_id)
        if scale is None:
            raise ScaleNotFoundError(scale_id)
        return scale

    async def _ensure_name_available(
        self, grading_system_id: int | None, school_id: int | None, name: str
    ) -> None:
        if await self.repo.find_scale_by_name(grading_system_id, school_id, name):
            raise DuplicateScaleNameError(name, grading_system_id)

    async def create_grade_scale(self, request: CreateGradeScaleRequest) -> GradeScale:
        ranges = ranges_to_domain(request.ranges)
        _check_range_set(ranges)
        await self._ensure_name_available(
            request.grading_system_id, request.school_id, request.name
        )

        created = await self.repo.create_scale(
            GradeScale(
                name=request.name,
                scale_type=request.scale_type,
                ranges=tuple(ranges),
                is_default=request.is_default,
                grading_system_id=request.grading_system_id,
                school_id=request.school_id,
                tenant_id=request.tenant_id,
            )
        )
        log_scale_operation(
            logger,
            "Grade scale created",
            "create_grade_scale",
            scale_id=created.id,
            name=created.name,
            is_default=created.is_default,
            range_count=len(created.ranges),
        )
        return created

    async def update_grade_scale(
        self, scale_id: int, request: UpdateGradeScaleRequest
    ) -> GradeScale:
        scale = await self._require_scale(scale_id)
        if request.name is not None and request.name != scale.name:
            await self._ensure_name_available(
                scale.grading_system_id, scale.school_id, request.name
            )

        updated = await self.repo.update_scale(
            scale_id,
            name=request.name,
            scale_type=request.scale_type,
            is_default=request.is_default,
        )
        if updated is None:
            raise ScaleNotFoundError(scale_id)

        log_scale_operation(
            logger,
            "Grade scale updated",
            "update_grade_scale",
            scale_id=scale_id,
            changes=request.model_dump(exclude_none=True),
        )
        return updated

    async def set_default(self, scale_id: int) -> GradeScale:
        scale = await self.repo.set_default(scale_id)
        if scale is None:
            raise ScaleNotFoundError(scale_id)

        log_scale_operation(
            logger,
            "Default grade scale set",
            "set_default",
            scale_id=scale_id,
            grading_system_id=scale.grading_system_id,
            school_id=scale.school_id,
        )
        return scale

    async def delete_grade_scale(self, scale_id: int) -> None:
        scale = await self._require_scale(scale_id)
        if scale.is_default:
            raise DefaultScaleDeletionError(scale_id)

        reference_count = await self.repo.count_grade_references(scale_id)
        if reference_count > 0:
            raise ScaleInUseError(scale_id, reference_count)

        if not await self.repo.delete_scale(scale_id):
            raise ScaleNotFoundError(scale_id)
        log_scale_operation(logger, "Grade scale deleted", "delete_grade_scale", scale_id=scale_id)

    async def duplicate_grade_scale(self, scale_id: int, new_name: str) -> GradeScale:
        source = await self._require_scale(scale_id)
        await self._ensure_name_available(source.grading_system_id, source.school_id, new_name)

        copy = replace(
            source,
            id=None,
            name=new_name,
            is_default=False,
            ranges=tuple(replace(r, id=None) for r in source.ranges),
        )
        duplicated = await self.repo.create_scale(copy)
        log_scale_operation(
            logger,
            "Grade scale duplicated",
            "duplicate_grade_scale",
            scale_id=duplicated.id,
            source_scale_id=scale_id,
        )
        return duplicated

    async def get_grade_scale(self, scale_id: int) -> GradeScale:
        return await self._require_scale(scale_id)

    async def list_scales_for_system(self, grading_system_id: int) -> list[GradeScale]:
        return await self.repo.list_scales_for_system(grading_system_id)

    async def get_default_scale(self, school_id: int, tenant_id: int) -> GradeScale | None:
        return await self.repo.get_default_scale(school_id, tenant_id)

    async def upsert_range(
        self, scale_id: int, request: GradeScaleRangeRequest, range_id: int | None = None
    ) -> GradeScaleRange:
        scale = await self._require_scale(scale_id)

        if range_id is None:
            new_range = request.to_domain(default_order=len(scale.ranges))
            candidate = [*scale.ranges, new_range]
        else:
            existing = next((r for r in scale.ranges if r.id == range_id), None)
            if existing is None:
                raise RangeNotFoundError(range_id)
            new_range = request.to_domain(default_order=existing.order)
            candidate = [r for r in scale.ranges if r.id != range_id] + [new_range]
        _check_range_set(candidate)

        saved = await self.repo.upsert_range(scale_id, new_range, range_id)
        if saved is None:
            if range_id is not None:
                raise RangeNotFoundError(range_id)
            raise ScaleNotFoundError(scale_id)

        log_scale_operation(
            logger,
            "Grade scale range saved",
            "upsert_range",
            scale_id=scale_id,
            range_id=saved.id,
            display_label=saved.display_label,
        )
        return saved

    async def delete_range(self, scale_id: int, range_id: int) -> None:
        scale = await self._require_scale(scale_id)
        if not any(r.id == range_id for r in scale.ranges):
            raise RangeNotFoundError(range_id)

        if not await self.repo.delete_range(range_id):
            raise RangeNotFoundError(range_id)
        log_scale_operation(
            logger,
            "Grade scale range deleted",
            "delete_range",
            scale_id=scale_id,
            range_id=range_id,
        )

    async def replace_ranges(
        self, scale_id: int, requests: list[GradeScaleRangeRequest]
    ) -> GradeScale:
        ranges = ranges_to_domain(requests)
        _check_range_set(ranges)

        scale = await self.repo.replace_ranges(scale_id, ranges)
        if scale is None:
            raise ScaleNotFoundError(scale_id)

        log_scale_operation(
            logger,
            "Grade scale ranges replaced",
            "replace_ranges",
            scale_id=scale_id,
            range_count=len(scale.ranges),
        )
        return scale

    async def convert_score(self, score: float, scale_id: int) -> ScoreReport:
        scale = await self._require_scale(scale_id)
        return describe_score(score, scale)

    async def convert_between_scales(
        self, score: float | str, from_scale_id: int, to_scale_id: int
    ) -> CrossScaleConversion:
        from_scale = await self._require_scale(from_scale_id)
        to_scale = await self._require_scale(to_scale_id)
        return convert_across_scales(score, from_scale, to_scale)

    async def calculate_gpa(self, request: CalculateGpaRequest, scale_id: int) -> float:
        """Weighted GPA of the request's grades on a stored scale; no grades yields 0.0."""
        scale = await self._require_scale(scale_id)
        return compute_gpa(request.to_domain(), scale)

    async def label_for_default_scale(
        self, school_id: int, tenant_id: int, percentage: float
    ) -> str | None:
        """
        Label a percentage with the school's default scale.

        The percentage is first expressed in the scale's own units, so a 0-20
        points default reads 85% as 17 points. Returns None when the school has
        no default scale yet, when that scale has no ranges or no percentage
        rule, or when the percentage falls outside every range.
        """
        scale = await self.repo.get_default_scale(school_id, tenant_id)
        if scale is None:
            return None
        if not scale.ranges:
            logger.warning(
                "Default grade scale has no ranges",
                scale_id=scale.id,
                school_id=school_id,
                tenant_id=tenant_id,
            )
            return None

        try:
            return label_for_percentage(percentage, scale)
        except UnsupportedScaleTypeError:
            logger.warning(
                "Default grade scale type cannot label percentages",
                scale_id=scale.id,
                scale_type=scale.scale_type.value,
                school_id=school_id,
            )
            return None

    async def seed_preset_scales(
        self, grading_system_id: int, school_id: int, tenant_id: int
    ) -> list[GradeScale]:
        """
        Create the built-in preset scales in a scope.

        Presets whose name already exists in the scope are skipped, so seeding
        twice is harmless. The 0-20 points scale becomes the default.
        """
        created: list[GradeScale] = []
        for preset_id in list_available_presets():
            preset = get_preset(preset_id)
            if await self.repo.find_scale_by_name(grading_system_id, school_id, preset.name):
                logger.info(
                    f"Preset grade scale '{preset.name}' already exists, skipping",
                    grading_system_id=grading_system_id,
                    school_id=school_id,
                )
                continue

            scale = build_scale_from_preset(
                preset_id,
                grading_system_id=grading_system_id,
                school_id=school_id,
                tenant_id=tenant_id,
                is_default=preset_id == DEFAULT_PRESET_ID,
            )
            created.append(await self.repo.create_scale(scale))

        log_scale_operation(
            logger,
            "Preset grade scales seeded",
            "seed_preset_scales",
            grading_system_id=grading_system_id,
            school_id=school_id,
            created=[s.name for s in created],
        )
        return created
