# -*- coding: utf-8 -*-
"""
Domain validators for land record entities.

Each validator wraps a GenericRequiredFieldsValidator for the plain
required fields and adds the entity's structural invariants.
"""

from enum import Enum
from typing import List

from models.area import SURVEY_NUMBER_TYPES
from models.land_basic_info import LandBasicInfo
from models.nondh import Nondh
from models.nondh_detail import NONDH_STATUSES, STATUS_VALID, NondhDetail
from models.panipatrak import Panipatrak
from models.year_slab import YearSlab
from utils.area_units import AREA_UNITS
from utils.logger import get_logger

from .validation_strategy import GenericRequiredFieldsValidator, ValidationStrategy

logger = get_logger(__name__)


class EntryCountPolicy(str, Enum):
    """How a slab's declared entry count is reconciled with its entry list."""
    REJECT = "reject"
    RECONCILE = "reconcile"


def _area_errors(area, label: str) -> List[str]:
    errors = []
    if area.unit not in AREA_UNITS:
        errors.append(f"{label}: unknown area unit '{area.unit}'")
    if area.value < 0:
        errors.append(f"{label}: area cannot be negative")
    return errors


class LandBasicInfoValidator(ValidationStrategy):
    """Location fields, area, and the survey number selected by s_no_type."""

    def __init__(self):
        self._required = GenericRequiredFieldsValidator(
            required_fields=["district", "taluka", "village"],
            field_labels={"district": "District", "taluka": "Taluka", "village": "Village"},
        )

    def validate(self, record: LandBasicInfo) -> List[str]:
        errors = self._required.validate(record)
        if record.s_no_type not in SURVEY_NUMBER_TYPES:
            errors.append(f"Unknown survey number type: {record.s_no_type}")
        elif not (record.active_survey_number or "").strip():
            errors.append(f"Required field cannot be empty: {record.s_no_type_display}")
        errors.extend(_area_errors(record.area, "Land area"))
        return errors


class YearSlabValidator(ValidationStrategy):
    """Year range, survey number, and paiky/ekatrikaran entry counts."""

    def __init__(self, entry_count_policy: EntryCountPolicy = EntryCountPolicy.REJECT):
        self.entry_count_policy = EntryCountPolicy(entry_count_policy)

    def validate(self, record: YearSlab) -> List[str]:
        errors = []
        label = f"Slab {record.start_year}-{record.end_year}"

        if record.start_year > record.end_year:
            errors.append(f"{label}: start year must not be after end year")
        if not record.s_no:
            errors.append(f"{label}: survey number is required")
        errors.extend(_area_errors(record.area, label))

        for entry_type in record.count_mismatches():
            message = (
                f"{label}: {entry_type} count is {record.declared_count(entry_type)} "
                f"but {len(record.entries_for(entry_type))} entries were given"
            )
            if self.entry_count_policy == EntryCountPolicy.REJECT:
                errors.append(message)
            else:
                logger.warning(f"{message}; count will be reconciled on save")

        return errors


class PanipatrakValidator(ValidationStrategy):
    """Slab reference, year and farmer allocations."""

    def validate(self, record: Panipatrak) -> List[str]:
        errors = []
        label = f"Panipatrak {record.year}"
        if not record.slab_id or not record.s_no:
            errors.append(f"{label}: slab and survey number are required")
        if not record.farmers:
            errors.append(f"{label}: at least one farmer is required")
        for farmer in record.farmers:
            if not farmer.name.strip():
                errors.append(f"{label}: all farmers must have a name")
            errors.extend(_area_errors(farmer.area, f"{label} farmer '{farmer.name}'"))
        return errors


class NondhValidator(ValidationStrategy):

    def validate(self, record: Nondh) -> List[str]:
        errors = []
        if record.number <= 0:
            errors.append("Nondh number must be positive")
        if record.s_no_type not in SURVEY_NUMBER_TYPES:
            errors.append(f"Unknown survey number type: {record.s_no_type}")
        if not record.affected_s_nos:
            errors.append(f"Nondh {record.number}: at least one affected survey number is required")
        return errors


class NondhDetailValidator(ValidationStrategy):
    """
    Status and reason rules for a nondh detail.

    Owner relation validity is not derived from the nondh status, so a
    nullified nondh with valid owner relations is accepted as-is.
    """

    def validate(self, record: NondhDetail) -> List[str]:
        errors = []
        if not record.nondh_id:
            errors.append("Nondh detail must reference a nondh")
        if record.status not in NONDH_STATUSES:
            errors.append(f"Unknown nondh status: {record.status}")
        elif record.status != STATUS_VALID and not (record.invalid_reason or "").strip():
            errors.append("A reason is required when the nondh is not valid")
        for relation in record.owner_relations:
            if not relation.owner_name.strip():
                errors.append("Owner name cannot be empty")
            errors.extend(_area_errors(relation.area, f"Owner '{relation.owner_name}'"))
        return errors
