# -*- coding: utf-8 -*-
"""
Wizard Context - Base class for managing wizard session state.

Provides unified interface for:
- Session identity and reference number generation
- Current step tracking with change notifications
- Serialization of the base fields
"""

from typing import Any, Dict, Optional
from datetime import datetime
import uuid

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)


class WizardContext(QObject):
    """
    Base class for wizard context.

    Steps are numbered from 1. Subclasses add their own data and extend
    to_dict() / from_dict().
    """

    # Signals
    current_step_changed = pyqtSignal(int, int)  # old_step, new_step

    def __init__(self, step_count: int, parent: Optional[QObject] = None):
        """Initialize base context properties."""
        super().__init__(parent)
        self.wizard_id: str = str(uuid.uuid4())
        self.status: str = "draft"  # draft, submitted
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()
        self.step_count: int = step_count
        self._current_step: int = 1
        self.reference_number: str = self._generate_reference_number()

    def _generate_reference_number(self) -> str:
        """
        Generate a unique reference number for the wizard session.

        Format: {PREFIX}-{YYYYMMDDHHMMSS}-{SHORT_UUID}
        Example: LRW-20260118153045-A3F2
        """
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
        short_id = self.wizard_id[:4].upper()
        prefix = self._get_reference_prefix()
        return f"{prefix}-{timestamp}-{short_id}"

    def _get_reference_prefix(self) -> str:
        """Get the prefix for reference number. Override in subclasses."""
        return "WIZ"

    def _touch(self):
        self.updated_at = datetime.now()

    @property
    def current_step(self) -> int:
        return self._current_step

    def set_current_step(self, step: int):
        """Move to ``step`` without any gating or bounds check."""
        if step == self._current_step:
            return
        old_step = self._current_step
        self._current_step = step
        self._touch()
        logger.debug(f"Current step {old_step} → {step}")
        self.current_step_changed.emit(old_step, step)

    def is_valid_step(self, step: int) -> bool:
        return 1 <= step <= self.step_count

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize context to dictionary.

        Subclasses should call super().to_dict() and add their own fields.
        """
        return {
            "wizard_id": self.wizard_id,
            "reference_number": self.reference_number,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step": self._current_step,
            "step_count": self.step_count,
        }

    @classmethod
    def _restore_base_fields(cls, context: 'WizardContext', data: Dict[str, Any]):
        """Helper method to restore base fields from dictionary."""
        context.wizard_id = data.get("wizard_id", context.wizard_id)
        context.reference_number = data.get("reference_number", context.reference_number)
        context.status = data.get("status", "draft")
        context._current_step = data.get("current_step", 1)

        # Parse datetime strings
        if "created_at" in data:
            context.created_at = datetime.fromisoformat(data["created_at"])
        if "updated_at" in data:
            context.updated_at = datetime.fromisoformat(data["updated_at"])
