# -*- coding: utf-8 -*-
"""
Land basic information entity model (wizard step 1).
"""

from dataclasses import dataclass, field
from typing import Optional

from .area import AreaInput, BLOCK_NO, RE_SURVEY_NO, S_NO, SURVEY_NUMBER_TYPE_LABELS


@dataclass
class LandBasicInfo:
    """
    Location, area and survey-number identity of a land parcel.
    Exactly one survey-number field is active, selected by ``s_no_type``.
    """

    # Location
    district: str = ""
    taluka: str = ""
    village: str = ""

    area: AreaInput = field(default_factory=AreaInput)

    # Survey-number identity
    s_no_type: str = S_NO  # s_no, block_no, re_survey_no
    s_no: str = ""
    block_no: Optional[str] = None
    re_survey_no: Optional[str] = None
    is_promulgation: bool = False

    # Integrated 7/12 extract
    integrated_712: Optional[str] = None
    integrated_712_file_name: Optional[str] = None

    @property
    def active_survey_number(self) -> Optional[str]:
        """The survey-number value selected by ``s_no_type``."""
        if self.s_no_type == BLOCK_NO:
            return self.block_no
        if self.s_no_type == RE_SURVEY_NO:
            return self.re_survey_no
        return self.s_no

    @property
    def s_no_type_display(self) -> str:
        return SURVEY_NUMBER_TYPE_LABELS.get(self.s_no_type, self.s_no_type)

    @property
    def location_display(self) -> str:
        parts = [p for p in (self.village, self.taluka, self.district) if p]
        return ", ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "district": self.district,
            "taluka": self.taluka,
            "village": self.village,
            "area": self.area.to_dict(),
            "s_no_type": self.s_no_type,
            "s_no": self.s_no,
            "block_no": self.block_no,
            "re_survey_no": self.re_survey_no,
            "is_promulgation": self.is_promulgation,
            "integrated_712": self.integrated_712,
            "integrated_712_file_name": self.integrated_712_file_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LandBasicInfo":
        """Create LandBasicInfo from dictionary."""
        data = dict(data)
        data["area"] = AreaInput.from_dict(data.get("area"))
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
