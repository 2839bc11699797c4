# -*- coding: utf-8 -*-
"""
Year slab and slab entry entity models (wizard step 2).
"""

from dataclasses import dataclass, field
from typing import List, Optional
import uuid

from .area import AreaInput, S_NO

# Slab entry classifications
PAIKY = "paiky"
EKATRIKARAN = "ekatrikaran"
ENTRY_TYPES = (PAIKY, EKATRIKARAN)


@dataclass
class SlabEntry:
    """A paiky or ekatrikaran sub-division of a year slab."""

    s_no: str = ""
    s_no_type: str = S_NO
    area: AreaInput = field(default_factory=AreaInput)
    integrated_712: Optional[str] = None

    @property
    def has_data(self) -> bool:
        """True when the entry carries a survey number or a positive area."""
        return bool(self.s_no) or self.area.value > 0

    def to_dict(self) -> dict:
        return {
            "s_no": self.s_no,
            "s_no_type": self.s_no_type,
            "area": self.area.to_dict(),
            "integrated_712": self.integrated_712,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SlabEntry":
        return cls(
            s_no=data.get("s_no", "") or "",
            s_no_type=data.get("s_no_type", S_NO) or S_NO,
            area=AreaInput.from_dict(data.get("area")),
            integrated_712=data.get("integrated_712"),
        )


@dataclass
class YearSlab:
    """
    Time-bounded partition of a parcel's history under one survey number.
    Paiky and ekatrikaran each keep a declared count and a list of entries.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    start_year: int = 0
    end_year: int = 0

    s_no: str = ""
    s_no_type: str = S_NO
    area: AreaInput = field(default_factory=AreaInput)
    integrated_712: Optional[str] = None

    # Partitioned-out sub-divisions
    paiky: bool = False
    paiky_count: int = 0
    paiky_entries: List[SlabEntry] = field(default_factory=list)

    # Consolidated-in sub-divisions
    ekatrikaran: bool = False
    ekatrikaran_count: int = 0
    ekatrikaran_entries: List[SlabEntry] = field(default_factory=list)

    @property
    def span_years(self) -> int:
        return self.end_year - self.start_year + 1

    def covers_year(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def entries_for(self, entry_type: str) -> List[SlabEntry]:
        if entry_type == PAIKY:
            return self.paiky_entries
        if entry_type == EKATRIKARAN:
            return self.ekatrikaran_entries
        raise ValueError(f"Unknown slab entry type: {entry_type}")

    def declared_count(self, entry_type: str) -> int:
        if entry_type == PAIKY:
            return self.paiky_count
        if entry_type == EKATRIKARAN:
            return self.ekatrikaran_count
        raise ValueError(f"Unknown slab entry type: {entry_type}")

    def is_flagged(self, entry_type: str) -> bool:
        return self.paiky if entry_type == PAIKY else self.ekatrikaran

    def count_mismatches(self) -> List[str]:
        """Entry types whose flag is set but whose entry list disagrees with the count."""
        return [
            entry_type for entry_type in ENTRY_TYPES
            if self.is_flagged(entry_type)
            and len(self.entries_for(entry_type)) != self.declared_count(entry_type)
        ]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "start_year": self.start_year,
            "end_year": self.end_year,
            "s_no": self.s_no,
            "s_no_type": self.s_no_type,
            "area": self.area.to_dict(),
            "integrated_712": self.integrated_712,
            "paiky": self.paiky,
            "paiky_count": self.paiky_count,
            "paiky_entries": [e.to_dict() for e in self.paiky_entries],
            "ekatrikaran": self.ekatrikaran,
            "ekatrikaran_count": self.ekatrikaran_count,
            "ekatrikaran_entries": [e.to_dict() for e in self.ekatrikaran_entries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "YearSlab":
        """Create YearSlab from dictionary."""
        data = dict(data)
        data["area"] = AreaInput.from_dict(data.get("area"))
        data["paiky_entries"] = [SlabEntry.from_dict(e) for e in data.get("paiky_entries") or []]
        data["ekatrikaran_entries"] = [
            SlabEntry.from_dict(e) for e in data.get("ekatrikaran_entries") or []
        ]
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
