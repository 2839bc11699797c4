# -*- coding: utf-8 -*-
"""
Nondh detail and owner relation entity models (wizard step 5).
"""

from dataclasses import dataclass, field
from typing import List, Optional
import uuid

from .area import AreaInput

NONDH_TYPES = (
    "Kabjedaar", "Ekatrikaran", "Varsai", "Hakkami", "Hayati_ma_hakh_dakhal",
    "Salesdeed", "Opp_Salesdeed", "Hukam", "Bojo", "Vechadi", "Other",
)
TENURE_TYPES = (
    "Navi", "Juni", "Kheti_Kheti_ma_Juni", "NA", "Bin_Kheti_Pre_Patra",
    "Prati_bandhit_satta_prakar",
)
HUKAM_TYPES = (
    "SSRD", "Collector", "Collector_ganot", "Prant", "Mamlajdaar", "GRT",
    "Jasu", "Krushipanch", "DILR",
)

# Nondh status
STATUS_VALID = "valid"
STATUS_INVALID = "invalid"
STATUS_NULLIFIED = "nullified"
NONDH_STATUSES = (STATUS_VALID, STATUS_INVALID, STATUS_NULLIFIED)


@dataclass
class OwnerRelation:
    """
    A new owner introduced by a nondh.
    ``is_valid`` is tracked independently of the parent nondh's status.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    owner_name: str = ""
    s_no: str = ""
    area: AreaInput = field(default_factory=AreaInput)
    tenure: str = "Navi"

    # Hukam (order) details
    hukam_status: Optional[str] = None
    hukam_type: Optional[str] = None
    hukam_date: Optional[str] = None  # ISO date
    restraining_order: Optional[bool] = None

    is_valid: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner_name": self.owner_name,
            "s_no": self.s_no,
            "area": self.area.to_dict(),
            "tenure": self.tenure,
            "hukam_status": self.hukam_status,
            "hukam_type": self.hukam_type,
            "hukam_date": self.hukam_date,
            "restraining_order": self.restraining_order,
            "is_valid": self.is_valid,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OwnerRelation":
        data = dict(data)
        data["area"] = AreaInput.from_dict(data.get("area"))
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class NondhDetail:
    """Substantive content of a nondh: type, reason, status and new owners."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nondh_id: str = ""
    s_no: str = ""

    type: str = "Kabjedaar"
    sub_type: Optional[str] = None
    vigat: Optional[str] = None

    status: str = STATUS_VALID  # valid, invalid, nullified
    invalid_reason: Optional[str] = None

    # Previous owner (Varsai)
    old_owner: Optional[str] = None

    show_in_output: bool = True
    has_documents: bool = False
    doc_upload: Optional[str] = None

    owner_relations: List[OwnerRelation] = field(default_factory=list)

    # Persisted row id for existing records
    db_id: Optional[str] = None

    @property
    def is_hukam(self) -> bool:
        return self.type == "Hukam"

    @property
    def status_display(self) -> str:
        """Get register display name for status."""
        statuses = {
            STATUS_VALID: "Pramanik",
            STATUS_INVALID: "Radd",
            STATUS_NULLIFIED: "Na Manjoor",
        }
        return statuses.get(self.status, self.status)

    @property
    def valid_owner_relations(self) -> List[OwnerRelation]:
        return [r for r in self.owner_relations if r.is_valid]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "nondh_id": self.nondh_id,
            "s_no": self.s_no,
            "type": self.type,
            "sub_type": self.sub_type,
            "vigat": self.vigat,
            "status": self.status,
            "invalid_reason": self.invalid_reason,
            "old_owner": self.old_owner,
            "show_in_output": self.show_in_output,
            "has_documents": self.has_documents,
            "doc_upload": self.doc_upload,
            "owner_relations": [r.to_dict() for r in self.owner_relations],
            "db_id": self.db_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NondhDetail":
        """Create NondhDetail from dictionary."""
        data = dict(data)
        data["owner_relations"] = [
            OwnerRelation.from_dict(r) for r in data.get("owner_relations") or []
        ]
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
