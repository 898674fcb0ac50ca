"""Shared test fixtures and configuration for Grade Scale Service tests."""

from __future__ import annotations

from typing import Callable

import pytest
from gradescale_core.scale_models import ScaleType

from services.grade_scale_service.api_models import (
    CreateGradeScaleRequest,
    GradeScaleRangeRequest,
)
from services.grade_scale_service.implementations.grade_scale_repository_mock_impl import (
    MockGradeScaleRepositoryImpl,
)
from services.grade_scale_service.implementations.grade_scale_service_impl import (
    GradeScaleServiceImpl,
)

GRADING_SYSTEM_ID = 10
SCHOOL_ID = 20
TENANT_ID = 30


@pytest.fixture
def letter_range_requests() -> list[GradeScaleRangeRequest]:
    return [
        GradeScaleRangeRequest(
            min_value=90, max_value=100, display_label="A", gpa_equivalent=4.0
        ),
        GradeScaleRangeRequest(
            min_value=80, max_value=89.99, display_label="B", gpa_equivalent=3.0
        ),
        GradeScaleRangeRequest(
            min_value=70, max_value=79.99, display_label="C", gpa_equivalent=2.0
        ),
        GradeScaleRangeRequest(
            min_value=60, max_value=69.99, display_label="D", gpa_equivalent=1.0
        ),
        GradeScaleRangeRequest(
            min_value=0, max_value=59.99, display_label="F", gpa_equivalent=0.0, is_passing=False
        ),
    ]


@pytest.fixture
def points_range_requests() -> list[GradeScaleRangeRequest]:
    return [
        GradeScaleRangeRequest(min_value=16, max_value=20, display_label="H"),
        GradeScaleRangeRequest(min_value=10, max_value=15.99, display_label="P"),
        GradeScaleRangeRequest(min_value=0, max_value=9.99, display_label="F", is_passing=False),
    ]


@pytest.fixture
def make_create_request() -> Callable[..., CreateGradeScaleRequest]:
    """Factory for create requests in the shared test scope."""

    def _make(
        name: str,
        ranges: list[GradeScaleRangeRequest] | None = None,
        scale_type: ScaleType = ScaleType.LETTER,
        is_default: bool = False,
        school_id: int = SCHOOL_ID,
        grading_system_id: int = GRADING_SYSTEM_ID,
    ) -> CreateGradeScaleRequest:
        return CreateGradeScaleRequest(
            grading_system_id=grading_system_id,
            school_id=school_id,
            tenant_id=TENANT_ID,
            name=name,
            scale_type=scale_type,
            is_default=is_default,
            ranges=ranges or [],
        )

    return _make


@pytest.fixture
def mock_repository() -> MockGradeScaleRepositoryImpl:
    return MockGradeScaleRepositoryImpl()


@pytest.fixture
def service(mock_repository: MockGradeScaleRepositoryImpl) -> GradeScaleServiceImpl:
    return GradeScaleServiceImpl(mock_repository)
