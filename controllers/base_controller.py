# -*- coding: utf-8 -*-
"""
Base Controller
===============
Base class for controllers in the Land Record Wizard.

Provides the OperationResult type and the loading/error signal pattern.
"""

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


@dataclass
class OperationResult(Generic[T]):
    """Result of a controller operation."""
    success: bool
    data: Optional[T] = None
    message: str = ""
    errors: List[str] = None

    def __post_init__(self):
        if self.errors is None:
            self.errors = []

    @classmethod
    def ok(cls, data: T = None, message: str = "") -> 'OperationResult[T]':
        """Create a successful result."""
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, errors: List[str] = None, data: T = None) -> 'OperationResult[T]':
        """Create a failed result."""
        return cls(success=False, data=data, message=message, errors=errors or [])


class BaseController(QObject):
    """
    Base controller class.

    Provides:
    - Common signal patterns
    - Loading and last-error state
    - Logging
    """

    # Common signals
    operation_started = pyqtSignal(str)  # operation name
    operation_completed = pyqtSignal(str, bool)  # operation name, success
    operation_error = pyqtSignal(str, str)  # operation name, error message
    data_changed = pyqtSignal()
    loading_changed = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._is_loading = False
        self._last_error = ""

    @property
    def is_loading(self) -> bool:
        """Check if controller is performing an operation."""
        return self._is_loading

    @property
    def last_error(self) -> str:
        """Get last error message."""
        return self._last_error

    def _set_loading(self, loading: bool):
        """Set loading state and emit signal."""
        if loading == self._is_loading:
            return
        self._is_loading = loading
        self.loading_changed.emit(loading)

    def _set_error(self, error: str):
        """Set error message."""
        self._last_error = error
        if error:
            logger.error(f"{self.__class__.__name__}: {error}")

    def _log_operation(self, operation: str, **kwargs):
        """Log an operation."""
        logger.info(f"{self.__class__.__name__}.{operation}: {kwargs}")

    def _emit_started(self, operation: str):
        """Emit operation started signal."""
        self._set_error("")
        self.operation_started.emit(operation)
        self._set_loading(True)

    def _emit_completed(self, operation: str, success: bool):
        """Emit operation completed signal."""
        self.operation_completed.emit(operation, success)
        self._set_loading(False)
        if success:
            self.data_changed.emit()

    def _emit_error(self, operation: str, error: str):
        """Emit operation error signal."""
        self._set_error(error)
        self.operation_error.emit(operation, error)
        self.operation_completed.emit(operation, False)
        self._set_loading(False)
