# -*- coding: utf-8 -*-
"""
Step gating rules for the Land Record Wizard.

Validates the step-indexed form data without UI coupling.
"""

from typing import Any, Dict, Optional, Tuple


class StepValidator:
    """Forward-chained preconditions for entering each wizard step."""

    # Step constants
    STEP_LAND_BASIC_INFO = 1
    STEP_YEAR_SLABS = 2
    STEP_PANIPATRAK = 3
    STEP_NONDH = 4
    STEP_NONDH_DETAILS = 5
    STEP_OUTPUT = 6

    STEP_COUNT = 6

    # Key each step stores its collection under in the form data bag
    STEP_DATA_KEYS = {
        STEP_LAND_BASIC_INFO: "land_basic_info",
        STEP_YEAR_SLABS: "year_slabs",
        STEP_PANIPATRAK: "panipatraks",
        STEP_NONDH: "nondhs",
        STEP_NONDH_DETAILS: "nondh_details",
    }

    # Entering step N requires the data recorded for step N-1
    _MESSAGES = {
        2: "Land basic information must be saved before adding year slabs",
        3: "At least one year slab is required before the panipatrak step",
        4: "At least one panipatrak is required before adding nondhs",
        5: "At least one nondh is required before adding nondh details",
        6: "At least one nondh detail is required before the output step",
    }

    @staticmethod
    def data_key(step: int) -> Optional[str]:
        return StepValidator.STEP_DATA_KEYS.get(step)

    @staticmethod
    def is_precondition_met(step: int, form_data: Dict[int, Dict[str, Any]]) -> bool:
        """
        Check the fixed precondition for entering ``step``.

        Step 2 needs a land_basic_info for step 1; steps 3-6 need a non-empty
        list recorded for the preceding step. Any other step is refused.
        """
        if step not in StepValidator._MESSAGES:
            return False

        previous = step - 1
        value = form_data.get(previous, {}).get(StepValidator.STEP_DATA_KEYS[previous])
        if previous == StepValidator.STEP_LAND_BASIC_INFO:
            return value is not None
        return bool(value)

    @staticmethod
    def validate_step(step: int, form_data: Dict[int, Dict[str, Any]]) -> Tuple[bool, str]:
        """
        Validate entry into ``step``.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if StepValidator.is_precondition_met(step, form_data):
            return True, ""
        return False, StepValidator._MESSAGES.get(step, f"Unknown wizard step: {step}")

    @staticmethod
    def get_step_name(step: int) -> str:
        """Get display name for step."""
        names = [
            "Land Basic Info",
            "Year Slabs",
            "Panipatrak",
            "Nondh",
            "Nondh Details",
            "Output",
        ]
        if 1 <= step <= len(names):
            return names[step - 1]
        return ""
