# -*- coding: utf-8 -*-
"""
Area unit conversion.

All conversions go through square meters as the canonical unit.
"""

from enum import Enum
from typing import Union


class AreaUnit(str, Enum):
    """Area units accepted by the land record forms."""
    ACRE = "acre"
    GUNTHA = "guntha"
    SQ_M = "sq_m"


# Square meters per unit
SQ_M_PER_UNIT = {
    AreaUnit.ACRE.value: 4046.86,
    AreaUnit.GUNTHA.value: 101.17,
    AreaUnit.SQ_M.value: 1.0,
}

AREA_UNITS = tuple(unit.value for unit in AreaUnit)


def _factor(unit: Union[AreaUnit, str]) -> float:
    # Unknown units pass the value through unchanged
    key = unit.value if isinstance(unit, AreaUnit) else unit
    return SQ_M_PER_UNIT.get(key, 1.0)


def convert_to_square_meters(value: float, unit: Union[AreaUnit, str]) -> float:
    """Convert an area magnitude in ``unit`` to square meters."""
    return value * _factor(unit)


def convert_from_square_meters(sq_meters: float, target_unit: Union[AreaUnit, str]) -> float:
    """Convert square meters to ``target_unit``."""
    return sq_meters / _factor(target_unit)


def convert_area(value: float, from_unit: Union[AreaUnit, str],
                 to_unit: Union[AreaUnit, str]) -> float:
    """Convert between any two supported units."""
    return convert_from_square_meters(convert_to_square_meters(value, from_unit), to_unit)


def is_valid_unit(unit: str) -> bool:
    return unit in SQ_M_PER_UNIT
