"""Implementations module for Grade Scale Service."""

from .grade_scale_repository_mock_impl import MockGradeScaleRepositoryImpl
from .grade_scale_repository_postgres_impl import PostgreSQLGradeScaleRepositoryImpl
from .grade_scale_service_impl import GradeScaleServiceImpl

__all__ = [
    "MockGradeScaleRepositoryImpl",
    "PostgreSQLGradeScaleRepositoryImpl",
    "GradeScaleServiceImpl",
]
