# -*- coding: utf-8 -*-
"""
Area value object and survey-number identity helpers shared by the land models.
"""

from dataclasses import dataclass
from typing import Optional

from utils.area_units import AREA_UNITS, convert_area, convert_to_square_meters

# Survey-number identity kinds
S_NO = "s_no"
BLOCK_NO = "block_no"
RE_SURVEY_NO = "re_survey_no"
SURVEY_NUMBER_TYPES = (S_NO, BLOCK_NO, RE_SURVEY_NO)

SURVEY_NUMBER_TYPE_LABELS = {
    S_NO: "Survey No.",
    BLOCK_NO: "Block No.",
    RE_SURVEY_NO: "Re-Survey No.",
}


@dataclass
class AreaInput:
    """An area magnitude with its unit (acre, guntha, sq_m)."""

    value: float = 0.0
    unit: str = "sq_m"

    @property
    def is_known_unit(self) -> bool:
        return self.unit in AREA_UNITS

    def to_square_meters(self) -> float:
        """Area in square meters."""
        return convert_to_square_meters(self.value, self.unit)

    def converted(self, unit: str) -> "AreaInput":
        """Return the same area expressed in ``unit``."""
        return AreaInput(value=convert_area(self.value, self.unit, unit), unit=unit)

    def to_dict(self) -> dict:
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AreaInput":
        if not data:
            return cls()
        return cls(value=data.get("value", 0.0) or 0.0, unit=data.get("unit", "sq_m") or "sq_m")
