# -*- coding: utf-8 -*-
"""
Land Record Wizard Controllers
==============================
Controllers sit between the wizard UI and the persistence gateway.

Usage:
    from controllers import LandRecordController

    controller = LandRecordController(context, gateway)
    result = controller.load_record()
    if not result.success:
        print(f"Error: {result.message}")
"""

from controllers.base_controller import (
    BaseController,
    OperationResult,
)
from controllers.land_record_controller import LandRecordController

__all__ = [
    "BaseController",
    "OperationResult",
    "LandRecordController",
]
