"""Grade Scale Service.

This package manages grade scales and their ranges for a grading system and
school, and converts scores, GPAs and cross-scale equivalents against them.
"""

from services.grade_scale_service.api_models import (
    CalculateGpaRequest,
    CreateGradeScaleRequest,
    GradeEntryRequest,
    GradeScaleRangeRequest,
    UpdateGradeScaleRequest,
)
from services.grade_scale_service.config import Settings, settings
from services.grade_scale_service.models_db import GradeRecordDB, GradeScaleDB, GradeScaleRangeDB
from services.grade_scale_service.protocols import (
    GradeScaleRepositoryProtocol,
    GradeScaleServiceProtocol,
)

from . import implementations

__all__ = [
    "Settings",
    "settings",
    # Protocols
    "GradeScaleRepositoryProtocol",
    "GradeScaleServiceProtocol",
    # Models
    "GradeScaleDB",
    "GradeScaleRangeDB",
    "GradeRecordDB",
    # API Models
    "CalculateGpaRequest",
    "CreateGradeScaleRequest",
    "GradeEntryRequest",
    "GradeScaleRangeRequest",
    "UpdateGradeScaleRequest",
    # Subpackages
    "implementations",
]
