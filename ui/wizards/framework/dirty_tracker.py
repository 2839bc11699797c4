# -*- coding: utf-8 -*-
"""
Dirty Tracker - "changed since baseline" detection.

Used at two granularities by the land record wizard:
- per write, by LandRecordContext.update_form_data (baseline = the step's
  previous bag entry, compared key by key)
- per step, by StepFormData (baseline = the snapshot taken on first load or
  last save, compared as a whole)
"""

import copy
import operator
from typing import Any, Callable, List, Mapping

_UNSET = object()
_MISSING = object()


def structurally_equal(left: Any, right: Any) -> bool:
    """Field-wise value equality; dataclasses, lists and dicts compare by content."""
    if left is _MISSING or right is _MISSING:
        return left is right
    return operator.eq(left, right)


class DirtyTracker:
    """Holds a deep-copied baseline and compares candidate values against it."""

    def __init__(self, baseline: Any = _UNSET,
                 comparator: Callable[[Any, Any], bool] = structurally_equal):
        self._comparator = comparator
        self._baseline = _UNSET
        if baseline is not _UNSET:
            self.rebase(baseline)

    @property
    def has_baseline(self) -> bool:
        return self._baseline is not _UNSET

    @property
    def baseline(self) -> Any:
        """A copy of the baseline, or None when none was captured."""
        if not self.has_baseline:
            return None
        return copy.deepcopy(self._baseline)

    def rebase(self, value: Any):
        """Capture ``value`` as the new baseline."""
        self._baseline = copy.deepcopy(value)

    def clear(self):
        self._baseline = _UNSET

    def is_dirty(self, value: Any) -> bool:
        """
        True when ``value`` differs from the baseline.

        Without a baseline any non-empty value counts as dirty.
        """
        if not self.has_baseline:
            return bool(value)
        return not self._comparator(self._baseline, value)

    def changed_keys(self, partial: Mapping[str, Any]) -> List[str]:
        """Top-level keys of ``partial`` whose value differs from the baseline mapping."""
        baseline = self._baseline if isinstance(self._baseline, Mapping) else {}
        return [
            key for key, value in partial.items()
            if not self._comparator(baseline.get(key, _MISSING), value)
        ]
