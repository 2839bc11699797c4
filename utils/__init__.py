# -*- coding: utf-8 -*-
"""
Land Record Wizard Utility Module
"""

from .logger import get_logger, setup_logger
from .area_units import (
    AreaUnit,
    convert_area,
    convert_from_square_meters,
    convert_to_square_meters,
)

__all__ = [
    "get_logger",
    "setup_logger",
    "AreaUnit",
    "convert_area",
    "convert_from_square_meters",
    "convert_to_square_meters",
]
