# -*- coding: utf-8 -*-
"""
Mapping between land record entities and their persisted row shapes.

Rows use the persistence API's snake_case columns (area_value/area_unit,
integrated_712, year_slab_id, entry_type, ...). Rows read back are checked
for their required columns and raise ValidationException otherwise.
"""

from typing import Any, Dict, Iterable, List, Optional

from models.area import AreaInput, S_NO
from models.land_basic_info import LandBasicInfo
from models.nondh import Nondh
from models.nondh_detail import (
    NondhDetail, OwnerRelation,
    STATUS_INVALID, STATUS_NULLIFIED, STATUS_VALID,
)
from models.panipatrak import Farmer, Panipatrak
from models.year_slab import EKATRIKARAN, ENTRY_TYPES, PAIKY, SlabEntry, YearSlab
from services.exceptions import ValidationException
from services.validation.record_validators import EntryCountPolicy
from utils.logger import get_logger

logger = get_logger(__name__)

# Register vocabulary used by older rows
_STATUS_ALIASES = {
    "valid": STATUS_VALID,
    "pramanik": STATUS_VALID,
    "invalid": STATUS_INVALID,
    "radd": STATUS_INVALID,
    "nullified": STATUS_NULLIFIED,
    "na_manjoor": STATUS_NULLIFIED,
}


def _require(row: Dict[str, Any], columns: Iterable[str], entity: str):
    if not isinstance(row, dict):
        raise ValidationException(f"{entity} row must be an object, got {type(row).__name__}",
                                  context=entity)
    missing = [c for c in columns if c not in row]
    if missing:
        raise ValidationException(
            f"{entity} row is missing columns: {', '.join(missing)}",
            errors=missing,
            context=entity,
        )


def _int_column(row: Dict[str, Any], column: str, entity: str) -> int:
    value = row[column]
    try:
        if isinstance(value, bool):
            raise TypeError(column)
        return int(value)
    except (TypeError, ValueError):
        raise ValidationException(
            f"{entity} column {column} must be an integer, got {value!r}",
            field=column,
            context=entity,
        )


def row_current_step(row: Dict[str, Any], step_count: int) -> int:
    """The persisted wizard step clamped to 1..step_count (1 when absent)."""
    if not row.get("current_step"):
        return 1
    return max(1, min(_int_column(row, "current_step", "land_record"), step_count))


def _area_from_row(row: Dict[str, Any]) -> AreaInput:
    return AreaInput(value=row.get("area_value") or 0, unit=row.get("area_unit") or "sq_m")


def normalize_status(value: Optional[str]) -> str:
    if not value:
        return STATUS_VALID
    if not isinstance(value, str):
        raise ValidationException(f"Nondh status must be text, got {value!r}", field="status")
    status = _STATUS_ALIASES.get(value.strip().lower())
    if status is None:
        raise ValidationException(f"Unknown nondh status: {value}", field="status")
    return status


# ==================== Land record ====================

def land_basic_info_to_row(info: LandBasicInfo, record_id: Optional[str] = None,
                           current_step: int = 1, status: str = "draft") -> Dict[str, Any]:
    row = {
        "district": info.district,
        "taluka": info.taluka,
        "village": info.village,
        "area_value": info.area.value,
        "area_unit": info.area.unit,
        "s_no_type": info.s_no_type,
        "s_no": info.s_no,
        "is_promulgation": info.is_promulgation,
        "block_no": info.block_no,
        "re_survey_no": info.re_survey_no,
        "integrated_712": info.integrated_712,
        "integrated_712_file_name": info.integrated_712_file_name,
        "current_step": current_step,
        "status": status,
    }
    if record_id:
        row["id"] = record_id
    return row


def row_to_land_basic_info(row: Dict[str, Any]) -> LandBasicInfo:
    _require(row, ("district", "taluka", "village", "s_no_type"), "land_record")
    return LandBasicInfo(
        district=row["district"] or "",
        taluka=row["taluka"] or "",
        village=row["village"] or "",
        area=_area_from_row(row),
        s_no_type=row["s_no_type"] or S_NO,
        s_no=row.get("s_no") or "",
        block_no=row.get("block_no"),
        re_survey_no=row.get("re_survey_no"),
        is_promulgation=bool(row.get("is_promulgation")),
        integrated_712=row.get("integrated_712"),
        integrated_712_file_name=row.get("integrated_712_file_name"),
    )


# ==================== Year slabs ====================

def slab_entry_to_row(entry: SlabEntry, entry_type: str) -> Dict[str, Any]:
    return {
        "entry_type": entry_type,
        "s_no": entry.s_no or "",
        "s_no_type": entry.s_no_type or S_NO,
        "area_value": entry.area.value or 0,
        "area_unit": entry.area.unit or "sq_m",
        "integrated_712": entry.integrated_712,
    }


def row_to_slab_entry(row: Dict[str, Any]) -> SlabEntry:
    return SlabEntry(
        s_no=row.get("s_no") or "",
        s_no_type=row.get("s_no_type") or S_NO,
        area=_area_from_row(row),
        integrated_712=row.get("integrated_712"),
    )


def year_slab_to_row(slab: YearSlab,
                     policy: EntryCountPolicy = EntryCountPolicy.REJECT) -> Dict[str, Any]:
    """
    Entries without a survey number or area are dropped. Entries are kept
    regardless of the paiky/ekatrikaran flag. Under RECONCILE a flagged
    slab's count is rewritten to the number of entries kept.
    """
    row = {
        "id": slab.id,
        "start_year": slab.start_year,
        "end_year": slab.end_year,
        "s_no": slab.s_no,
        "s_no_type": slab.s_no_type,
        "area_value": slab.area.value,
        "area_unit": slab.area.unit,
        "integrated_712": slab.integrated_712,
        "paiky": slab.paiky,
        "ekatrikaran": slab.ekatrikaran,
    }
    for entry_type in ENTRY_TYPES:
        entries = [
            slab_entry_to_row(e, entry_type) for e in slab.entries_for(entry_type) if e.has_data
        ]
        count = slab.declared_count(entry_type) or 0
        if policy == EntryCountPolicy.RECONCILE and slab.is_flagged(entry_type) and count != len(entries):
            logger.info(f"Slab {slab.id}: {entry_type}_count {count} reconciled to {len(entries)}")
            count = len(entries)
        row[f"{entry_type}_count"] = count
        row[f"{entry_type}_entries"] = entries
    return row


def row_to_year_slab(row: Dict[str, Any],
                     entry_rows: Optional[List[Dict[str, Any]]] = None) -> YearSlab:
    """
    Build a YearSlab from its row. Entries come either nested in the row
    (``paiky_entries`` / ``ekatrikaran_entries``) or as flat ``entry_rows``
    carrying ``year_slab_id`` and ``entry_type``.
    """
    _require(row, ("id", "start_year", "end_year"), "year_slab")

    if entry_rows is not None:
        own = [e for e in entry_rows if e.get("year_slab_id") == row["id"]]
        paiky_rows = [e for e in own if e.get("entry_type") == PAIKY]
        ekatrikaran_rows = [e for e in own if e.get("entry_type") == EKATRIKARAN]
    else:
        paiky_rows = row.get("paiky_entries") or []
        ekatrikaran_rows = row.get("ekatrikaran_entries") or []

    return YearSlab(
        id=row["id"],
        start_year=_int_column(row, "start_year", "year_slab"),
        end_year=_int_column(row, "end_year", "year_slab"),
        s_no=row.get("s_no") or "",
        s_no_type=row.get("s_no_type") or S_NO,
        area=_area_from_row(row),
        integrated_712=row.get("integrated_712"),
        paiky=bool(row.get("paiky")),
        paiky_count=row.get("paiky_count") or 0,
        paiky_entries=[row_to_slab_entry(e) for e in paiky_rows],
        ekatrikaran=bool(row.get("ekatrikaran")),
        ekatrikaran_count=row.get("ekatrikaran_count") or 0,
        ekatrikaran_entries=[row_to_slab_entry(e) for e in ekatrikaran_rows],
    )


# ==================== Panipatraks ====================

def panipatrak_to_row(panipatrak: Panipatrak) -> Dict[str, Any]:
    return {
        "year_slab_id": panipatrak.slab_id,
        "s_no": panipatrak.s_no,
        "year": panipatrak.year,
        "farmers": [
            {
                "name": farmer.name.strip(),
                "area_value": farmer.area.value,
                "area_unit": farmer.area.unit,
                "paiky_number": farmer.paiky_number,
                "ekatrikaran_number": farmer.ekatrikaran_number,
                "farmer_type": farmer.farmer_type,
            }
            for farmer in panipatrak.farmers
        ],
    }


def row_to_panipatrak(row: Dict[str, Any]) -> Panipatrak:
    _require(row, ("year_slab_id", "year"), "panipatrak")
    farmers = []
    for f in row.get("farmers") or []:
        farmer = Farmer(
            name=f.get("name") or "",
            area=_area_from_row(f),
            farmer_type=f.get("farmer_type") or "regular",
            paiky_number=f.get("paiky_number"),
            ekatrikaran_number=f.get("ekatrikaran_number"),
        )
        if f.get("id"):
            farmer.id = f["id"]
        farmers.append(farmer)
    return Panipatrak(
        slab_id=row["year_slab_id"],
        s_no=row.get("s_no") or "",
        year=_int_column(row, "year", "panipatrak"),
        farmers=farmers,
    )


# ==================== Nondhs ====================

def nondh_to_row(nondh: Nondh) -> Dict[str, Any]:
    return {
        "id": nondh.id,
        "number": nondh.number,
        "s_no_type": nondh.s_no_type,
        "affected_s_nos": list(nondh.affected_s_nos),
        "nondh_doc_url": nondh.nondh_doc,
    }


def row_to_nondh(row: Dict[str, Any]) -> Nondh:
    _require(row, ("id", "number"), "nondh")
    return Nondh(
        id=row["id"],
        number=_int_column(row, "number", "nondh"),
        s_no_type=row.get("s_no_type") or S_NO,
        affected_s_nos=list(row.get("affected_s_nos") or []),
        nondh_doc=row.get("nondh_doc_url"),
    )


# ==================== Nondh details ====================

def owner_relation_to_row(relation: OwnerRelation) -> Dict[str, Any]:
    restraining = None
    if relation.restraining_order is not None:
        restraining = "yes" if relation.restraining_order else "no"
    return {
        "id": relation.id,
        "owner_name": relation.owner_name,
        "s_no": relation.s_no,
        "area_value": relation.area.value,
        "area_unit": relation.area.unit,
        "tenure": relation.tenure,
        "hukam_status": relation.hukam_status,
        "hukam_type": relation.hukam_type,
        "hukam_date": relation.hukam_date,
        "restraining_order": restraining,
        "is_valid": relation.is_valid,
    }


def row_to_owner_relation(row: Dict[str, Any]) -> OwnerRelation:
    _require(row, ("owner_name",), "owner_relation")
    restraining = row.get("restraining_order")
    if isinstance(restraining, str):
        restraining = restraining.lower() == "yes"
    relation = OwnerRelation(
        owner_name=row["owner_name"] or "",
        s_no=row.get("s_no") or "",
        area=_area_from_row(row),
        tenure=row.get("tenure") or "Navi",
        hukam_status=row.get("hukam_status"),
        hukam_type=row.get("hukam_type"),
        hukam_date=row.get("hukam_date"),
        restraining_order=restraining,
        is_valid=row.get("is_valid", True) is not False,
    )
    if row.get("id"):
        relation.id = row["id"]
    return relation


def nondh_detail_to_row(detail: NondhDetail) -> Dict[str, Any]:
    return {
        "id": detail.db_id or detail.id,
        "nondh_id": detail.nondh_id,
        "s_no": detail.s_no,
        "type": detail.type,
        "sub_type": detail.sub_type,
        "vigat": detail.vigat,
        "status": detail.status,
        "invalid_reason": detail.invalid_reason if detail.status != STATUS_VALID else None,
        "old_owner": detail.old_owner,
        "show_in_output": detail.show_in_output,
        "has_documents": detail.has_documents,
        "doc_upload_url": detail.doc_upload,
        "owner_relations": [owner_relation_to_row(r) for r in detail.owner_relations],
    }


def row_to_nondh_detail(row: Dict[str, Any]) -> NondhDetail:
    _require(row, ("id", "nondh_id", "type"), "nondh_detail")
    return NondhDetail(
        id=row["id"],
        nondh_id=row["nondh_id"],
        s_no=row.get("s_no") or "",
        type=row["type"],
        sub_type=row.get("sub_type"),
        vigat=row.get("vigat"),
        status=normalize_status(row.get("status")),
        invalid_reason=row.get("invalid_reason"),
        old_owner=row.get("old_owner"),
        show_in_output=row.get("show_in_output", True) is not False,
        has_documents=bool(row.get("has_documents")),
        doc_upload=row.get("doc_upload_url"),
        owner_relations=[row_to_owner_relation(r) for r in row.get("owner_relations") or []],
        db_id=row["id"],
    )
