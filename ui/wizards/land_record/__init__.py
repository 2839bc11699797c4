# -*- coding: utf-8 -*-
"""
Land Record Wizard Package.

This package contains:
- LandRecordContext: session state store for the six-step wizard
- StepFormData: per-step data accessor with snapshot-based change tracking
"""

from .record_context import LandRecordContext, MODE_ADD, MODE_EDIT, MODE_VIEW, MODES
from .step_form_data import StepFormData

__all__ = [
    'LandRecordContext',
    'StepFormData',
    'MODE_ADD',
    'MODE_EDIT',
    'MODE_VIEW',
    'MODES',
]
