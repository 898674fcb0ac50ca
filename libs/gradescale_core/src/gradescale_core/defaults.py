"""
Default scale selection within a (grading system, school) scope.

These are the storage-independent halves of default handling: repositories
apply the same rules inside a transaction.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import replace

from .scale_models import GradeScale


def _sort_key(scale: GradeScale) -> tuple[bool, int]:
    # Unsaved scales (id None) sort after persisted ones
    return (scale.id is None, scale.id or 0)


def pick_default_scale(scales: Iterable[GradeScale]) -> GradeScale | None:
    """
    Return the default scale among candidates already filtered to one scope.

    If more than one candidate is flagged default, the lowest id wins so the
    answer is deterministic; callers can detect that case with
    count_defaults().
    """
    defaults = sorted((s for s in scales if s.is_default), key=_sort_key)
    return defaults[0] if defaults else None


def count_defaults(scales: Iterable[GradeScale]) -> int:
    return sum(1 for s in scales if s.is_default)


def apply_default(scales: Sequence[GradeScale], target_id: int) -> list[GradeScale]:
    """
    Flag target_id as default and clear the flag on its scope siblings.

    Scales outside the target's scope are returned unchanged.

    Raises:
        KeyError: If no scale has target_id
    """
    target = next((s for s in scales if s.id == target_id), None)
    if target is None:
        raise KeyError(target_id)

    updated: list[GradeScale] = []
    for scale in scales:
        if scale.id == target_id:
            updated.append(replace(scale, is_default=True))
        elif scale.scope == target.scope and scale.is_default:
            updated.append(replace(scale, is_default=False))
        else:
            updated.append(scale)
    return updated


def conflicting_default_ids(scales: Iterable[GradeScale]) -> list[int]:
    """
    Ids of defaults sharing a (grading system, school) scope with another default.

    Defaults in different grading systems of the same school do not conflict.
    """
    by_scope: dict[tuple[int | None, int | None], list[GradeScale]] = defaultdict(list)
    for scale in scales:
        by_scope[scale.scope].append(scale)

    conflicting: list[int] = []
    for group in by_scope.values():
        if count_defaults(group) > 1:
            conflicting.extend(s.id for s in group if s.is_default and s.id is not None)
    return sorted(conflicting)
