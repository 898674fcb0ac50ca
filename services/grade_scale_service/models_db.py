from __future__ import annotations

from datetime import datetime

from gradescale_core.scale_models import GradeScale, GradeScaleRange, ScaleType
from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class GradeScaleDB(Base):
    __tablename__ = "grade_scales"
    __table_args__ = (
        Index("ix_grade_scales_scope", "grading_system_id", "school_id"),
        Index("ix_grade_scales_school_tenant_default", "school_id", "tenant_id", "is_default"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    grading_system_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    school_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tenant_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    scale_type: Mapped[ScaleType] = mapped_column(
        SQLAlchemyEnum(
            ScaleType,
            name="scale_type_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        nullable=False,
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    ranges: Mapped[list["GradeScaleRangeDB"]] = relationship(
        back_populates="grade_scale",
        cascade="all, delete-orphan",
        order_by="[GradeScaleRangeDB.order, GradeScaleRangeDB.id]",
    )

    def to_domain(self) -> GradeScale:
        """Convert to the engine value object; ranges must already be loaded."""
        return GradeScale(
            id=self.id,
            name=self.name,
            scale_type=self.scale_type,
            is_default=self.is_default,
            grading_system_id=self.grading_system_id,
            school_id=self.school_id,
            tenant_id=self.tenant_id,
            ranges=tuple(r.to_domain() for r in self.ranges),
        )


class GradeScaleRangeDB(Base):
    __tablename__ = "grade_scale_ranges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    grade_scale_id: Mapped[int] = mapped_column(
        ForeignKey("grade_scales.id", ondelete="CASCADE"), nullable=False, index=True
    )
    min_value: Mapped[float] = mapped_column(Float, nullable=False)
    max_value: Mapped[float] = mapped_column(Float, nullable=False)
    display_label: Mapped[str] = mapped_column(String(10), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    gpa_equivalent: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_passing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    grade_scale: Mapped["GradeScaleDB"] = relationship(back_populates="ranges")

    @classmethod
    def from_domain(cls, grade_range: GradeScaleRange) -> GradeScaleRangeDB:
        return cls(
            min_value=grade_range.min_value,
            max_value=grade_range.max_value,
            display_label=grade_range.display_label,
            description=grade_range.description,
            color=grade_range.color,
            gpa_equivalent=grade_range.gpa_equivalent,
            is_passing=grade_range.is_passing,
            order=grade_range.order,
        )

    def to_domain(self) -> GradeScaleRange:
        return GradeScaleRange(
            id=self.id,
            min_value=self.min_value,
            max_value=self.max_value,
            display_label=self.display_label,
            description=self.description,
            color=self.color,
            gpa_equivalent=self.gpa_equivalent,
            is_passing=self.is_passing,
            order=self.order,
        )


class GradeRecordDB(Base):
    """A recorded grade that was read on a scale; blocks deleting that scale."""

    __tablename__ = "grade_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    grade_scale_id: Mapped[int] = mapped_column(
        ForeignKey("grade_scales.id"), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(Integer, nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    letter_grade: Mapped[str | None] = mapped_column(String(10), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
