# -*- coding: utf-8 -*-
"""
Land Record Controller
======================
Connects a LandRecordContext to the persistence gateway.

Handles:
- Hydrating the context in view/edit mode
- Validating and saving one step or the whole record
- Submitting the record
- Uploading supporting documents

Gateway and validation failures are reported through OperationResult and
the operation_error signal; they never propagate to the caller.
"""

from typing import Callable, Dict, List, Optional, Tuple

from PyQt5.QtCore import pyqtSignal

from controllers.base_controller import BaseController, OperationResult
from services.exceptions import (
    ApiException, NetworkException, RecordContextError, ValidationException,
)
from services.record_gateway import RecordGateway
from services import record_mapper as mapper
from services.validation import ValidationFactory
from services.wizard.step_validator import StepValidator
from ui.wizards.land_record.record_context import MODE_ADD
from utils.logger import get_logger

logger = get_logger(__name__)

_GATEWAY_ERRORS = (ApiException, NetworkException, ValidationException)
# Row shapes the mapper does not check column by column
_MALFORMED_ROW_ERRORS = (TypeError, ValueError, AttributeError, KeyError)


class LandRecordController(BaseController):
    """Controller for loading and persisting one land record wizard session."""

    record_loaded = pyqtSignal(str)  # record id
    step_saved = pyqtSignal(int)  # step
    record_submitted = pyqtSignal(str)  # record id

    def __init__(self, context, gateway: RecordGateway,
                 validation_factory: Optional[ValidationFactory] = None, parent=None):
        super().__init__(parent)
        if context is None:
            raise RecordContextError("LandRecordController requires a LandRecordContext")
        context.require_active()
        self.context = context
        self.gateway = gateway
        self.validation = validation_factory or ValidationFactory()
        # Set after the first create in add mode
        self._record_id: Optional[str] = context.record_id

    @property
    def record_id(self) -> Optional[str]:
        return self._record_id

    # ==================== Hydration ====================

    def load_record(self) -> OperationResult:
        """
        Hydrate the context from the gateway (view/edit mode).

        On failure the context is left with its empty collections.
        """
        self.context.require_active()
        if self.context.mode == MODE_ADD:
            return OperationResult.ok(message="Nothing to load in add mode")

        record_id = self.context.record_id
        self._emit_started("load_record")
        try:
            record = self.gateway.fetch_complete_record(record_id)
            land_basic_info = mapper.row_to_land_basic_info(record.land_record)
            year_slabs = [mapper.row_to_year_slab(r, record.slab_entries) for r in record.year_slabs]
            panipatraks = [mapper.row_to_panipatrak(r) for r in record.panipatraks]
            nondhs = [mapper.row_to_nondh(r) for r in record.nondhs]
            nondh_details = [mapper.row_to_nondh_detail(r) for r in record.nondh_details]
            current_step = mapper.row_current_step(record.land_record, self.context.step_count)
        except _GATEWAY_ERRORS as e:
            self._emit_error("load_record", str(e))
            return OperationResult.fail(message=f"Error loading land record: {e}")
        except _MALFORMED_ROW_ERRORS as e:
            self._emit_error("load_record", f"Malformed land record data: {e}")
            return OperationResult.fail(message=f"Error loading land record: malformed data ({e})")

        self.context.set_land_basic_info(land_basic_info)
        self.context.set_year_slabs(year_slabs)
        self.context.set_panipatraks(panipatraks)
        self.context.set_nondhs(nondhs)
        self.context.set_nondh_details(nondh_details)

        self.context.set_current_step(current_step)
        self.context.status = record.land_record.get("status") or "draft"
        self.context.reset_unsaved_changes()

        self._log_operation("load_record", record_id=record_id, year_slabs=len(year_slabs),
                            nondhs=len(nondhs))
        self._emit_completed("load_record", True)
        self.record_loaded.emit(record_id)
        return OperationResult.ok(data=record_id, message="Land record loaded successfully")

    # ==================== Saving ====================

    def _step_rows(self, step: int) -> Tuple[str, List[str], Optional[Callable[[str, list], dict]], list]:
        """(collection name, validation errors, gateway save function, rows) for a child step."""
        policy = self.validation.entry_count_policy
        if step == StepValidator.STEP_YEAR_SLABS:
            slabs = self.context.year_slabs
            return ("year_slabs", self.validation.validate_all(slabs, "year_slab"),
                    self.gateway.save_year_slabs,
                    [mapper.year_slab_to_row(s, policy) for s in slabs])
        if step == StepValidator.STEP_PANIPATRAK:
            items = self.context.panipatraks
            return ("panipatraks", self.validation.validate_all(items, "panipatrak"),
                    self.gateway.save_panipatraks, [mapper.panipatrak_to_row(p) for p in items])
        if step == StepValidator.STEP_NONDH:
            items = self.context.nondhs
            return ("nondhs", self.validation.validate_all(items, "nondh"),
                    self.gateway.save_nondhs, [mapper.nondh_to_row(n) for n in items])
        if step == StepValidator.STEP_NONDH_DETAILS:
            items = self.context.nondh_details
            return ("nondh_details", self.validation.validate_all(items, "nondh_detail"),
                    self.gateway.save_nondh_details, [mapper.nondh_detail_to_row(d) for d in items])
        return ("", [], None, [])

    def _save_land_record(self, status: str = "draft", current_step: Optional[int] = None) -> str:
        """Create or update the land record row; returns its id."""
        info = self.context.land_basic_info
        row = mapper.land_basic_info_to_row(
            info,
            record_id=self._record_id,
            current_step=current_step or self.context.current_step,
            status=status,
        )
        saved = self.gateway.save_land_record(row)
        record_id = saved.get("id") or self._record_id
        if not record_id:
            raise ApiException("No record ID returned for saved land record",
                               context="save_land_record")
        self._record_id = record_id
        return record_id

    def save_step(self, step: Optional[int] = None, accessor=None) -> OperationResult:
        """
        Validate and persist the data of ``step`` (default: current step).

        The land record row is written first when the step is 1 or when it
        has never been saved. ``accessor`` (the step's StepFormData) is
        marked as saved only after every write succeeded.
        """
        self.context.require_active()
        step = step or self.context.current_step
        operation = f"save_step_{step}"

        info = self.context.land_basic_info
        if info is None:
            return OperationResult.fail(message="No data to save",
                                        errors=["Land basic information is required"])

        errors = self.validation.validate(info, "land_basic_info") if step == 1 or not self._record_id else []
        collection, child_errors, save_children, rows = self._step_rows(step)
        errors.extend(child_errors)
        if errors:
            logger.warning(f"Step {step} not saved, validation failed: {errors}")
            return OperationResult.fail(message=f"Step {step} has invalid data", errors=errors)

        self._emit_started(operation)
        land_saved = False
        try:
            if step == 1 or not self._record_id:
                self._save_land_record()
                land_saved = True
            if save_children is not None:
                save_children(self._record_id, rows)
        except _GATEWAY_ERRORS as e:
            self._emit_error(operation, str(e))
            if land_saved and save_children is not None:
                return OperationResult.fail(
                    message=f"Step {step} was only partially saved",
                    errors=[f"{collection}: {e}"],
                    data=self._record_id,
                )
            return OperationResult.fail(message=f"Error saving step {step}: {e}", errors=[str(e)])

        if accessor is not None:
            accessor.mark_as_saved()
        else:
            self.context.set_has_unsaved_changes(step, False)

        self._emit_completed(operation, True)
        self.step_saved.emit(step)
        return OperationResult.ok(data=self._record_id, message=f"Step {step} saved successfully")

    def save_all(self) -> OperationResult:
        """
        Persist the land record and every non-empty collection.

        Each collection is attempted even if an earlier one failed; failures
        are listed in the result's errors. Nothing is rolled back.
        """
        self.context.require_active()
        info = self.context.land_basic_info
        if info is None:
            return OperationResult.fail(message="No data to save")

        errors = self.validation.validate(info, "land_basic_info")
        if errors:
            return OperationResult.fail(message="Land basic information is invalid", errors=errors)

        self._emit_started("save_all")
        try:
            self._save_land_record()
        except _GATEWAY_ERRORS as e:
            self._emit_error("save_all", str(e))
            return OperationResult.fail(message=f"Error saving land record: {e}", errors=[str(e)])
        self.context.set_has_unsaved_changes(StepValidator.STEP_LAND_BASIC_INFO, False)

        failures: Dict[str, str] = {}
        for step in (StepValidator.STEP_YEAR_SLABS, StepValidator.STEP_PANIPATRAK,
                     StepValidator.STEP_NONDH, StepValidator.STEP_NONDH_DETAILS):
            collection, step_errors, save_children, rows = self._step_rows(step)
            if not rows:
                continue
            if step_errors:
                failures[collection] = "; ".join(step_errors)
                continue
            try:
                save_children(self._record_id, rows)
            except _GATEWAY_ERRORS as e:
                failures[collection] = str(e)
                continue
            self.context.set_has_unsaved_changes(step, False)

        if failures:
            error_list = [f"{name}: {message}" for name, message in failures.items()]
            self._emit_error("save_all", "; ".join(error_list))
            return OperationResult.fail(message="Land record was only partially saved",
                                        errors=error_list, data=self._record_id)

        self._emit_completed("save_all", True)
        return OperationResult.ok(data=self._record_id, message="Land record saved successfully")

    def submit_all_forms(self) -> OperationResult:
        """Mark the saved record as submitted."""
        self.context.require_active()
        if not self._record_id or self.context.land_basic_info is None:
            return OperationResult.fail(message="No data to submit")

        self._emit_started("submit")
        try:
            self._save_land_record(status="submitted", current_step=self.context.step_count)
        except _GATEWAY_ERRORS as e:
            self._emit_error("submit", str(e))
            return OperationResult.fail(message=f"Error submitting forms: {e}", errors=[str(e)])

        self.context.status = "submitted"
        self._emit_completed("submit", True)
        self.record_submitted.emit(self._record_id)
        return OperationResult.ok(data=self._record_id, message="All forms submitted successfully")

    # ==================== Documents ====================

    def upload_document(self, file_path: str, folder: str = "uploads") -> OperationResult:
        """Upload a supporting document and return its public URL in ``data``."""
        self._emit_started("upload_document")
        url = self.gateway.upload_document(file_path, folder)
        if not url:
            self._emit_error("upload_document", f"Upload failed: {file_path}")
            return OperationResult.fail(message="Document upload failed")
        self._emit_completed("upload_document", True)
        return OperationResult.ok(data=url)
