# -*- coding: utf-8 -*-
"""
Step Form Data - per-step read/write façade over a LandRecordContext.

Tracks whether a step's data differs from the snapshot taken when the step
was first loaded (or last saved). This is separate from the per-write check
in LandRecordContext.update_form_data; both write the same unsaved-changes
flag, and that flag in the context is what save prompts should read.
"""

import copy
from typing import Any, Dict, Optional

from services.exceptions import RecordContextError
from ui.wizards.framework import DirtyTracker
from utils.logger import get_logger

logger = get_logger(__name__)


class StepFormData:
    """
    Accessor for one wizard step.

    The snapshot is captured on the first get_step_data() call and only
    re-captured by mark_as_saved() or after reset_step_data().
    """

    def __init__(self, context, step: int):
        if context is None:
            raise RecordContextError("StepFormData must be bound to a LandRecordContext")
        context.require_active()
        self._context = context
        self.step = step
        self._original = DirtyTracker()
        self._current: Optional[Dict[str, Any]] = None
        self._is_initialized = False

    @property
    def context(self):
        return self._context

    @property
    def has_unsaved_changes(self) -> bool:
        return self._context.has_unsaved_changes(self.step)

    @property
    def current_data(self) -> Optional[Dict[str, Any]]:
        """Copy of the entry as last read or written through this accessor."""
        return copy.deepcopy(self._current)

    @property
    def has_snapshot(self) -> bool:
        return self._original.has_baseline

    @property
    def snapshot(self) -> Optional[Dict[str, Any]]:
        """Copy of the load/save snapshot, or None before the first load."""
        return self._original.baseline

    def get_step_data(self) -> Dict[str, Any]:
        """Return the step's bag entry, snapshotting it on first access."""
        self._context.require_active()
        step_data = self._context.get_form_data(self.step)

        if not self._is_initialized:
            self._original.rebase(step_data)
            self._current = copy.deepcopy(step_data)
            self._is_initialized = True

        return step_data

    def update_step_data(self, updates: Dict[str, Any]):
        """Merge ``updates`` and recompute dirty-ness against the snapshot."""
        self._context.require_active()
        new_step_data = self._context.merge_form_data(self.step, updates)
        self._current = new_step_data
        self._context.set_has_unsaved_changes(self.step, self._original.is_dirty(new_step_data))

    def reset_step_data(self):
        """Drop the step's entry and re-arm snapshot capture."""
        self._context.require_active()
        self._context.remove_form_data(self.step)
        self._context.set_has_unsaved_changes(self.step, False)
        self._original.clear()
        self._current = None
        self._is_initialized = False

    def mark_as_saved(self):
        """Use the current entry as the new snapshot. Call after a confirmed save."""
        self._context.require_active()
        self._original.rebase(self._context.get_form_data(self.step))
        self._is_initialized = True
        self._context.set_has_unsaved_changes(self.step, False)
        logger.debug(f"Step {self.step} marked as saved")

    def revert_to_original(self):
        """Restore the snapshot into the bag; no-op when there is none."""
        self._context.require_active()
        if not self._original.has_baseline:
            return
        original = self._original.baseline
        self._context.replace_form_data(self.step, original)
        self._current = copy.deepcopy(original)
        self._context.set_has_unsaved_changes(self.step, False)
