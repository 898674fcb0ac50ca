from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from gradescale_core.defaults import conflicting_default_ids
from gradescale_core.range_validation import validate_ranges
from gradescale_core.scale_models import GradeScale, GradeScaleRange, ScaleType
from gradescale_service_libs.logging_utils import create_service_logger
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from services.grade_scale_service.exceptions import (
    DefaultScaleDeletionError,
    InvalidRangeSetError,
    ScaleInUseError,
)
from services.grade_scale_service.models_db import GradeRecordDB, GradeScaleDB, GradeScaleRangeDB
from services.grade_scale_service.protocols import GradeScaleRepositoryProtocol

logger = create_service_logger("grade_scale_service.repository")


class PostgreSQLGradeScaleRepositoryImpl(GradeScaleRepositoryProtocol):
    """SQLAlchemy implementation of GradeScaleRepositoryProtocol.

    Runs against PostgreSQL through asyncpg in deployment; any async SQLAlchemy
    URL works. ORM rows are converted to value objects before the session closes.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional session context."""
        session = self.async_session_maker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def _load_scale(
        self, session: AsyncSession, scale_id: int, for_update: bool = False
    ) -> GradeScaleDB | None:
        stmt = (
            select(GradeScaleDB)
            .where(GradeScaleDB.id == scale_id)
            .options(selectinload(GradeScaleDB.ranges))
        )
        if for_update:
            # Serializes writers that check and then modify the same scale
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    async def _clear_scope_defaults(
        self,
        session: AsyncSession,
        grading_system_id: int | None,
        school_id: int | None,
        exclude_id: int | None = None,
    ) -> None:
        stmt = update(GradeScaleDB).where(
            GradeScaleDB.grading_system_id == grading_system_id,
            GradeScaleDB.school_id == school_id,
            GradeScaleDB.is_default.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(GradeScaleDB.id != exclude_id)
        await session.execute(stmt.values(is_default=False))

    async def _count_references(self, session: AsyncSession, scale_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(GradeRecordDB)
            .where(GradeRecordDB.grade_scale_id == scale_id)
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def create_scale(self, scale: GradeScale) -> GradeScale:
        try:
            async with self.session() as session:
                if scale.is_default:
                    await self._clear_scope_defaults(
                        session, scale.grading_system_id, scale.school_id
                    )

                scale_db = GradeScaleDB(
                    name=scale.name,
                    scale_type=scale.scale_type,
                    is_default=scale.is_default,
                    grading_system_id=scale.grading_system_id,
                    school_id=scale.school_id,
                    tenant_id=scale.tenant_id,
                    ranges=[GradeScaleRangeDB.from_domain(r) for r in scale.ranges],
                )
                session.add(scale_db)
                await session.flush()
                return scale_db.to_domain()
        except Exception as e:
            logger.error(
                f"Failed to create grade scale '{scale.name}': {e.__class__.__name__}: {e}"
            )
            raise

    async def get_scale_by_id(self, scale_id: int) -> GradeScale | None:
        async with self.session() as session:
            scale_db = await self._load_scale(session, scale_id)
            return scale_db.to_domain() if scale_db else None

    async def find_scale_by_name(
        self, grading_system_id: int | None, school_id: int | None, name: str
    ) -> GradeScale | None:
        async with self.session() as session:
            stmt = (
                select(GradeScaleDB)
                .where(
                    GradeScaleDB.grading_system_id == grading_system_id,
                    GradeScaleDB.school_id == school_id,
                    GradeScaleDB.name == name,
                )
                .options(selectinload(GradeScaleDB.ranges))
                .order_by(GradeScaleDB.id)
            )
            result = await session.execute(stmt)
            scale_db = result.scalars().first()
            return scale_db.to_domain() if scale_db else None

    async def list_scales_for_system(self, grading_system_id: int) -> list[GradeScale]:
        async with self.session() as session:
            stmt = (
                select(GradeScaleDB)
                .where(GradeScaleDB.grading_system_id == grading_system_id)
                .options(selectinload(GradeScaleDB.ranges))
                .order_by(GradeScaleDB.is_default.desc(), GradeScaleDB.name)
            )
            result = await session.execute(stmt)
            return [scale_db.to_domain() for scale_db in result.scalars().all()]

    async def update_scale(
        self,
        scale_id: int,
        *,
        name: str | None = None,
        scale_type: ScaleType | None = None,
        is_default: bool | None = None,
    ) -> GradeScale | None:
        try:
            async with self.session() as session:
                scale_db = await self._load_scale(session, scale_id, for_update=True)
                if scale_db is None:
                    return None

                if name is not None:
                    scale_db.name = name
                if scale_type is not None:
                    scale_db.scale_type = scale_type
                if is_default is True:
                    await self._clear_scope_defaults(
                        session, scale_db.grading_system_id, scale_db.school_id, scale_db.id
                    )
                if is_default is not None:
                    scale_db.is_default = is_default

                await session.flush()
                return scale_db.to_domain()
        except Exception as e:
            logger.error(f"Failed to update grade scale {scale_id}: {e.__class__.__name__}: {e}")
            raise

    async def delete_scale(self, scale_id: int) -> bool:
        async with self.session() as session:
            scale_db = await self._load_scale(session, scale_id, for_update=True)
            if scale_db is None:
                return False

            # Re-checked under the row lock; a concurrent set_default may have landed
            if scale_db.is_default:
                raise DefaultScaleDeletionError(scale_id)
            reference_count = await self._count_references(session, scale_id)
            if reference_count > 0:
                raise ScaleInUseError(scale_id, reference_count)

            await session.delete(scale_db)
            return True

    async def set_default(self, scale_id: int) -> GradeScale | None:
        try:
            async with self.session() as session:
                scale_db = await self._load_scale(session, scale_id, for_update=True)
                if scale_db is None:
                    return None

                await self._clear_scope_defaults(
                    session, scale_db.grading_system_id, scale_db.school_id, scale_db.id
                )
                scale_db.is_default = True
                await session.flush()
                return scale_db.to_domain()
        except Exception as e:
            logger.error(
                f"Failed to set default grade scale {scale_id}: {e.__class__.__name__}: {e}"
            )
            raise

    async def get_default_scale(self, school_id: int, tenant_id: int) -> GradeScale | None:
        async with self.session() as session:
            stmt = (
                select(GradeScaleDB)
                .where(
                    GradeScaleDB.school_id == school_id,
                    GradeScaleDB.tenant_id == tenant_id,
                    GradeScaleDB.is_default.is_(True),
                )
                .options(selectinload(GradeScaleDB.ranges))
                .order_by(GradeScaleDB.id)
            )
            result = await session.execute(stmt)
            defaults = [scale_db.to_domain() for scale_db in result.scalars().all()]
            if not defaults:
                return None

            conflicting = conflicting_default_ids(defaults)
            if conflicting:
                logger.warning(
                    "Multiple default grade scales in one grading system, using lowest id",
                    school_id=school_id,
                    tenant_id=tenant_id,
                    scale_ids=conflicting,
                )
            return defaults[0]

    async def upsert_range(
        self, scale_id: int, grade_range: GradeScaleRange, range_id: int | None = None
    ) -> GradeScaleRange | None:
        async with self.session() as session:
            scale_db = await self._load_scale(session, scale_id, for_update=True)
            if scale_db is None:
                return None

            range_db: GradeScaleRangeDB | None = None
            if range_id is not None:
                range_db = next((r for r in scale_db.ranges if r.id == range_id), None)
                if range_db is None:
                    return None

            # Validated against the locked rows so concurrent upserts cannot overlap
            siblings = [r.to_domain() for r in scale_db.ranges if r.id != range_id]
            violations = validate_ranges([*siblings, grade_range])
            if violations:
                raise InvalidRangeSetError(violations)

            if range_db is None:
                range_db = GradeScaleRangeDB.from_domain(grade_range)
                scale_db.ranges.append(range_db)
            else:
                range_db.min_value = grade_range.min_value
                range_db.max_value = grade_range.max_value
                range_db.display_label = grade_range.display_label
                range_db.description = grade_range.description
                range_db.color = grade_range.color
                range_db.gpa_equivalent = grade_range.gpa_equivalent
                range_db.is_passing = grade_range.is_passing
                range_db.order = grade_range.order

            await session.flush()
            return range_db.to_domain()

    async def delete_range(self, range_id: int) -> bool:
        async with self.session() as session:
            range_db = await session.get(GradeScaleRangeDB, range_id)
            if range_db is None:
                return False
            await session.delete(range_db)
            return True

    async def replace_ranges(
        self, scale_id: int, ranges: list[GradeScaleRange]
    ) -> GradeScale | None:
        try:
            async with self.session() as session:
                scale_db = await self._load_scale(session, scale_id)
                if scale_db is None:
                    return None

                # Orphaned rows are deleted by the relationship cascade
                scale_db.ranges = [GradeScaleRangeDB.from_domain(r) for r in ranges]
                await session.flush()
                return scale_db.to_domain()
        except Exception as e:
            logger.error(
                f"Failed to replace ranges of grade scale {scale_id}: "
                f"{e.__class__.__name__}: {e}"
            )
            raise

    async def count_grade_references(self, scale_id: int) -> int:
        async with self.session() as session:
            return await self._count_references(session, scale_id)
