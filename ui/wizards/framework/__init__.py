# -*- coding: utf-8 -*-
"""
Wizard Framework - state, change tracking and navigation for multi-step wizards.
"""

from .dirty_tracker import DirtyTracker, structurally_equal
from .wizard_context import WizardContext
from .step_navigator import StepNavigator

__all__ = [
    'DirtyTracker',
    'structurally_equal',
    'WizardContext',
    'StepNavigator'
]
