# -*- coding: utf-8 -*-
"""
Panipatrak (yearly crop/revenue register) entity models (wizard step 3).
"""

from dataclasses import dataclass, field
from typing import List, Optional
import uuid

from .area import AreaInput


@dataclass
class Farmer:
    """A farmer's area allocation within a panipatrak."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    area: AreaInput = field(default_factory=AreaInput)

    farmer_type: str = "regular"  # regular, paiky, ekatrikaran
    paiky_number: Optional[int] = None
    ekatrikaran_number: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "area": self.area.to_dict(),
            "farmer_type": self.farmer_type,
            "paiky_number": self.paiky_number,
            "ekatrikaran_number": self.ekatrikaran_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Farmer":
        data = dict(data)
        data["area"] = AreaInput.from_dict(data.get("area"))
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class Panipatrak:
    """Binds a year slab and survey number to one year's farmer allocations."""

    slab_id: str = ""
    s_no: str = ""
    year: int = 0
    farmers: List[Farmer] = field(default_factory=list)

    @property
    def total_area_sq_m(self) -> float:
        return sum(f.area.to_square_meters() for f in self.farmers)

    def to_dict(self) -> dict:
        return {
            "slab_id": self.slab_id,
            "s_no": self.s_no,
            "year": self.year,
            "farmers": [f.to_dict() for f in self.farmers],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Panipatrak":
        return cls(
            slab_id=data.get("slab_id", ""),
            s_no=data.get("s_no", ""),
            year=data.get("year", 0),
            farmers=[Farmer.from_dict(f) for f in data.get("farmers") or []],
        )
