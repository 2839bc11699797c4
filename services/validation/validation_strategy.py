# -*- coding: utf-8 -*-
"""
Validation Strategy Pattern - Abstract interface for record validation.

Provides a pluggable architecture for different validation rules without
modifying existing validation logic.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


def as_record_dict(record: Any) -> Dict[str, Any]:
    """Accept either a plain dict or a model exposing ``to_dict()``."""
    if isinstance(record, dict):
        return record
    return record.to_dict()


class ValidationStrategy(ABC):
    """
    Abstract base class for validation strategies.

    Each strategy implements specific validation rules for one record type.
    """

    @abstractmethod
    def validate(self, record: Any) -> List[str]:
        """
        Validate a record and return list of error messages.

        Args:
            record: Model instance or dictionary containing record data

        Returns:
            List of error messages (empty list if valid)
        """
        pass

    def is_valid(self, record: Any) -> bool:
        """Check if record is valid."""
        return len(self.validate(record)) == 0


class GenericRequiredFieldsValidator(ValidationStrategy):
    """
    Generic validator for checking required fields.

    Validates that specified fields exist and are not empty.
    """

    def __init__(self, required_fields: List[str], field_labels: Optional[Dict[str, str]] = None):
        """
        Initialize validator with required fields.

        Args:
            required_fields: List of field names that must be present and non-empty
            field_labels: Optional mapping of field names to human-readable labels
        """
        self.required_fields = list(required_fields)
        self.field_labels = field_labels or {}

    def validate(self, record: Any) -> List[str]:
        """Validate that all required fields are present and non-empty."""
        data = as_record_dict(record)
        errors = []

        for field in self.required_fields:
            label = self.field_labels.get(field, field)

            if field not in data:
                errors.append(f"Missing required field: {label}")
                continue

            value = data[field]
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.append(f"Required field cannot be empty: {label}")

        return errors
