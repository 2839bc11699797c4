# -*- coding: utf-8 -*-
"""
Nondh (mutation record) entity model (wizard step 4).
"""

from dataclasses import dataclass, field
from typing import List, Optional
import uuid

from .area import S_NO


@dataclass
class Nondh:
    """An amendment/mutation record against one or more survey numbers."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    number: int = 0
    s_no_type: str = S_NO
    affected_s_nos: List[str] = field(default_factory=list)

    # Supporting document URL
    nondh_doc: Optional[str] = None

    def affects(self, s_no: str) -> bool:
        return s_no in self.affected_s_nos

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "number": self.number,
            "s_no_type": self.s_no_type,
            "affected_s_nos": list(self.affected_s_nos),
            "nondh_doc": self.nondh_doc,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Nondh":
        data = dict(data)
        data["affected_s_nos"] = list(data.get("affected_s_nos") or [])
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
