# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression (next/previous)
- Gating checks before forward navigation
- Progress tracking
"""

from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from services.exceptions import RecordContextError
from services.wizard.step_validator import StepValidator
from utils.logger import get_logger

logger = get_logger(__name__)


class StepNavigator(QObject):
    """
    Enforces step gating on top of a land record context.

    The context itself accepts any step; this navigator is where
    navigation is actually refused.
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_step, new_step
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)
    navigation_blocked = pyqtSignal(int, str)  # target_step, reason

    def __init__(self, context, strict: Optional[bool] = None,
                 parent: Optional[QObject] = None):
        """
        Initialize the navigator.

        Args:
            context: LandRecordContext for the session
            strict: Refuse ungated forward moves (defaults to Config.STRICT_STEP_NAVIGATION)
            parent: Parent QObject
        """
        super().__init__(parent)
        if context is None:
            raise RecordContextError("StepNavigator requires a LandRecordContext")
        context.require_active()
        if strict is None:
            from app.config import Config
            strict = Config.STRICT_STEP_NAVIGATION
        self.context = context
        self.strict = strict

        self.context.form_data_changed.connect(self._on_form_data_changed)

    @property
    def current_step(self) -> int:
        return self.context.current_step

    def get_step_count(self) -> int:
        return self.context.step_count

    def can_go_next(self) -> bool:
        """Check if we can navigate to the next step."""
        target = self.current_step + 1
        if target > self.get_step_count():
            return False
        return not self.strict or self.context.can_proceed_to_step(target)

    def can_go_previous(self) -> bool:
        return self.current_step > 1

    def next_step(self) -> bool:
        """Navigate to the next step."""
        if self.current_step >= self.get_step_count():
            logger.debug(f"Cannot go next: already at last step ({self.current_step})")
            return False
        return self.goto_step(self.current_step + 1)

    def previous_step(self) -> bool:
        """Navigate to the previous step."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous: already at first step ({self.current_step})")
            return False
        return self.goto_step(self.current_step - 1)

    def goto_step(self, step: int, skip_validation: bool = False) -> bool:
        """
        Navigate to a specific step.

        Args:
            step: Target step (1-based)
            skip_validation: If True, skip the gating check

        Returns:
            True if navigation was successful
        """
        self.context.require_active()

        if not self.context.is_valid_step(step):
            logger.error(f"Invalid step: {step} (valid range: 1-{self.get_step_count()})")
            return False

        if step == self.current_step:
            return True

        if self.strict and not skip_validation and not self.context.can_proceed_to_step(step):
            _, reason = StepValidator.validate_step(step, self.context.form_data)
            logger.warning(f"Navigation to step {step} blocked: {reason}")
            self.navigation_blocked.emit(step, reason)
            return False

        return self._navigate_to(step)

    def _navigate_to(self, new_step: int) -> bool:
        old_step = self.current_step
        logger.info(f"Navigating: Step {old_step} → {new_step}")
        self.context.set_current_step(new_step)

        self.step_changed.emit(old_step, new_step)
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())
        return True

    def reset(self):
        """Reset navigator to first step."""
        self._navigate_to(1)

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        if self.get_step_count() <= 1:
            return 0.0
        return ((self.current_step - 1) / (self.get_step_count() - 1)) * 100.0

    def _on_form_data_changed(self, step: int):
        self.can_go_next_changed.emit(self.can_go_next())
