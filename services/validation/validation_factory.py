# -*- coding: utf-8 -*-
"""
Validation Factory - Creates appropriate validators for different record types.

Provides a central point for creating and managing validation strategies.
"""

from typing import Any, Dict, Iterable, List, Optional

from .validation_strategy import ValidationStrategy
from .record_validators import (
    EntryCountPolicy,
    LandBasicInfoValidator,
    NondhDetailValidator,
    NondhValidator,
    PanipatrakValidator,
    YearSlabValidator,
)


class ValidationFactory:
    """
    Registry of validation strategies keyed by record type
    ('land_basic_info', 'year_slab', 'panipatrak', 'nondh', 'nondh_detail').
    """

    def __init__(self, entry_count_policy: Optional[str] = None):
        if entry_count_policy is None:
            from app.config import Config
            entry_count_policy = Config.SLAB_ENTRY_COUNT_POLICY
        self.entry_count_policy = EntryCountPolicy(entry_count_policy)
        self._validators: Dict[str, ValidationStrategy] = {}
        self._register_default_validators()

    def _register_default_validators(self):
        """Register built-in validators for the land record entities."""
        self.register_validator('land_basic_info', LandBasicInfoValidator())
        self.register_validator('year_slab', YearSlabValidator(self.entry_count_policy))
        self.register_validator('panipatrak', PanipatrakValidator())
        self.register_validator('nondh', NondhValidator())
        self.register_validator('nondh_detail', NondhDetailValidator())

    def register_validator(self, record_type: str, validator: ValidationStrategy):
        """Register a validation strategy for a specific record type."""
        self._validators[record_type.lower()] = validator

    def get_validator(self, record_type: str) -> Optional[ValidationStrategy]:
        """Get a registered validator by record type."""
        return self._validators.get(record_type.lower())

    def validate(self, record: Any, record_type: str) -> List[str]:
        """
        Validate a record using the appropriate validator.

        Returns:
            List of error messages (empty if valid)
        """
        validator = self.get_validator(record_type)
        if not validator:
            return [f"No validator registered for record type: {record_type}"]

        return validator.validate(record)

    def validate_all(self, records: Iterable[Any], record_type: str) -> List[str]:
        """Validate every record of a collection and concatenate the errors."""
        errors: List[str] = []
        for record in records:
            errors.extend(self.validate(record, record_type))
        return errors

    def is_valid(self, record: Any, record_type: str) -> bool:
        """Check if a record is valid."""
        return len(self.validate(record, record_type)) == 0

    def get_registered_types(self) -> List[str]:
        """Get list of registered record types."""
        return list(self._validators.keys())
