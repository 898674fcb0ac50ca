"""
Unit tests for default scale selection.
"""

from __future__ import annotations

import pytest
from gradescale_core.defaults import (
    apply_default,
    conflicting_default_ids,
    count_defaults,
    pick_default_scale,
)
from gradescale_core.scale_models import GradeScale, ScaleType


def _scale(scale_id: int | None, is_default: bool, grading_system_id: int = 1) -> GradeScale:
    return GradeScale(
        id=scale_id,
        name=f"Scale {scale_id}",
        scale_type=ScaleType.LETTER,
        is_default=is_default,
        grading_system_id=grading_system_id,
        school_id=10,
    )


class TestPickDefaultScale:
    """Tests for pick_default_scale."""

    def test_returns_flagged_scale(self) -> None:
        scales = [_scale(1, False), _scale(2, True), _scale(3, False)]

        picked = pick_default_scale(scales)

        assert picked is not None
        assert picked.id == 2

    def test_returns_none_without_default(self) -> None:
        assert pick_default_scale([_scale(1, False)]) is None
        assert pick_default_scale([]) is None

    def test_ambiguous_defaults_pick_lowest_id(self) -> None:
        """Test corrupted data with two defaults still yields one answer."""
        scales = [_scale(7, True), _scale(3, True), _scale(5, False)]

        picked = pick_default_scale(scales)

        assert picked is not None
        assert picked.id == 3
        assert count_defaults(scales) == 2


class TestApplyDefault:
    """Tests for apply_default."""

    def test_target_becomes_only_default_in_scope(self) -> None:
        scales = [_scale(1, True), _scale(2, False), _scale(3, False)]

        updated = apply_default(scales, 2)

        assert [s.id for s in updated if s.is_default] == [2]

    def test_is_idempotent(self) -> None:
        """Test applying the same default twice leaves exactly that one default."""
        scales = [_scale(1, True), _scale(2, False)]

        updated = apply_default(apply_default(scales, 2), 2)

        assert [s.id for s in updated if s.is_default] == [2]

    def test_other_scopes_untouched(self) -> None:
        scales = [_scale(1, True), _scale(2, False), _scale(3, True, grading_system_id=2)]

        updated = apply_default(scales, 2)

        assert {s.id for s in updated if s.is_default} == {2, 3}

    def test_unknown_target_raises(self) -> None:
        with pytest.raises(KeyError):
            apply_default([_scale(1, True)], 99)


class TestConflictingDefaultIds:
    """Tests for conflicting_default_ids."""

    def test_defaults_in_separate_grading_systems_do_not_conflict(self) -> None:
        scales = [_scale(1, True, grading_system_id=1), _scale(2, True, grading_system_id=2)]

        assert conflicting_default_ids(scales) == []

    def test_reports_defaults_sharing_a_scope(self) -> None:
        scales = [
            _scale(4, True),
            _scale(2, True),
            _scale(3, False),
            _scale(9, True, grading_system_id=2),
        ]

        assert conflicting_default_ids(scales) == [2, 4]

    def test_no_scales(self) -> None:
        assert conflicting_default_ids([]) == []
