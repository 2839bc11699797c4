# -*- coding: utf-8 -*-
"""
Land Record Context - single source of truth for a land record wizard session.

Holds:
- Current step and session identity (mode, record id)
- The five typed entity collections
- A step-indexed form data bag mirroring those collections
- Step-indexed unsaved-changes flags

No operation here raises; gating is advisory (see StepNavigator for
enforcement) and absent data is represented by empty defaults.
"""

import copy
from typing import Any, Dict, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Config
from models.land_basic_info import LandBasicInfo
from models.nondh import Nondh
from models.nondh_detail import NondhDetail
from models.panipatrak import Panipatrak
from models.year_slab import YearSlab
from services.exceptions import RecordContextError
from services.wizard.step_validator import StepValidator
from ui.wizards.framework import DirtyTracker, WizardContext
from utils.logger import get_logger

logger = get_logger(__name__)

MODE_ADD = "add"
MODE_VIEW = "view"
MODE_EDIT = "edit"
MODES = (MODE_ADD, MODE_VIEW, MODE_EDIT)

# bag key -> (step, empty value)
_COLLECTIONS = {
    "land_basic_info": (StepValidator.STEP_LAND_BASIC_INFO, None),
    "year_slabs": (StepValidator.STEP_YEAR_SLABS, []),
    "panipatraks": (StepValidator.STEP_PANIPATRAK, []),
    "nondhs": (StepValidator.STEP_NONDH, []),
    "nondh_details": (StepValidator.STEP_NONDH_DETAILS, []),
}

# bag key -> entity type held by the collection
_ENTITY_TYPES = {
    "land_basic_info": LandBasicInfo,
    "year_slabs": YearSlab,
    "panipatraks": Panipatrak,
    "nondhs": Nondh,
    "nondh_details": NondhDetail,
}


class LandRecordContext(WizardContext):
    """
    Record State Store for the land record wizard.

    Construct one per session and pass it explicitly to StepFormData,
    StepNavigator and LandRecordController.
    """

    # Signals
    form_data_changed = pyqtSignal(int)  # step
    unsaved_changes_changed = pyqtSignal(int, bool)  # step, has_changes
    collection_changed = pyqtSignal(str)  # bag key

    def __init__(self, mode: str = MODE_ADD, record_id: Optional[str] = None,
                 step_count: Optional[int] = None, parent: Optional[QObject] = None):
        if mode not in MODES:
            raise RecordContextError(f"Unknown wizard mode: {mode}")
        if (mode == MODE_ADD) != (record_id is None):
            raise RecordContextError(
                f"record_id must be given for view/edit mode and omitted for add mode (mode={mode})"
            )

        super().__init__(step_count or Config.WIZARD_STEP_COUNT, parent)
        self._mode = mode
        self._record_id = record_id
        self._active = True
        self._init_state()

    def _init_state(self):
        self._land_basic_info: Optional[LandBasicInfo] = None
        self._year_slabs: List[YearSlab] = []
        self._panipatraks: List[Panipatrak] = []
        self._nondhs: List[Nondh] = []
        self._nondh_details: List[NondhDetail] = []

        self._form_data: Dict[int, Dict[str, Any]] = {}
        self._unsaved_changes: Dict[int, bool] = self._clean_flags()
        self._unsaved_revision = 0

    def _clean_flags(self) -> Dict[int, bool]:
        return {step: False for step in range(1, self.step_count + 1)}

    def _get_reference_prefix(self) -> str:
        return Config.REFERENCE_PREFIX

    # =========================================================================
    # Session identity
    # =========================================================================

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def record_id(self) -> Optional[str]:
        return self._record_id

    @property
    def is_read_only(self) -> bool:
        return self._mode == MODE_VIEW

    @property
    def is_active(self) -> bool:
        return self._active

    def require_active(self):
        """Raise if the session was disposed."""
        if not self._active:
            raise RecordContextError("Land record context was disposed; it cannot be used any more")

    def dispose(self):
        """End the session: discard all data and refuse further use by collaborators."""
        self._init_state()
        self._active = False
        logger.debug(f"Disposed land record context {self.reference_number}")

    def reset(self):
        """Discard all entered data and return to step 1."""
        filled_steps = sorted(self._form_data)
        dirty_steps = [step for step, value in self._unsaved_changes.items() if value]
        self._init_state()
        self.set_current_step(1)
        for key in _COLLECTIONS:
            self.collection_changed.emit(key)
        for step in filled_steps:
            self.form_data_changed.emit(step)
        for step in dirty_steps:
            self.unsaved_changes_changed.emit(step, False)

    # =========================================================================
    # Navigation
    # =========================================================================

    def set_current_step(self, step: int):
        """Unconditional step change; out-of-range or ungated steps are only logged."""
        if not self.is_valid_step(step):
            logger.warning(f"Step {step} is outside 1-{self.step_count}")
        elif not self.can_proceed_to_step(step):
            logger.warning(f"Step {step} set without its precondition being met")
        super().set_current_step(step)

    def can_proceed_to_step(self, step: int) -> bool:
        """Visited steps are always allowed; later steps need their predecessor's data."""
        if step <= self.current_step:
            return True
        return StepValidator.is_precondition_met(step, self._form_data)

    # =========================================================================
    # Unsaved changes
    # =========================================================================

    @property
    def unsaved_changes(self) -> Dict[int, bool]:
        return dict(self._unsaved_changes)

    @property
    def unsaved_revision(self) -> int:
        """Incremented every time the unsaved-changes map actually changes."""
        return self._unsaved_revision

    @property
    def any_unsaved_changes(self) -> bool:
        return any(self._unsaved_changes.values())

    def has_unsaved_changes(self, step: int) -> bool:
        return self._unsaved_changes.get(step, False)

    def set_has_unsaved_changes(self, step: int, value: bool):
        """Store the flag only when it differs from the current one."""
        value = bool(value)
        if self._unsaved_changes.get(step, False) == value:
            return
        self._unsaved_changes = {**self._unsaved_changes, step: value}
        self._unsaved_revision += 1
        self.unsaved_changes_changed.emit(step, value)

    def reset_unsaved_changes(self):
        """Clear the flags of every step."""
        dirty_steps = [step for step, value in self._unsaved_changes.items() if value]
        if not dirty_steps and len(self._unsaved_changes) == self.step_count:
            return
        self._unsaved_changes = self._clean_flags()
        self._unsaved_revision += 1
        for step in dirty_steps:
            self.unsaved_changes_changed.emit(step, False)

    # =========================================================================
    # Form data bag
    # =========================================================================

    @property
    def form_data(self) -> Dict[int, Dict[str, Any]]:
        return copy.deepcopy(self._form_data)

    def get_form_data(self, step: int) -> Dict[str, Any]:
        """A copy of the bag entry for ``step`` ({} when absent)."""
        return copy.deepcopy(self._form_data.get(step, {}))

    def merge_form_data(self, step: int, partial: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge ``partial`` into the step's entry without touching dirty flags."""
        merged = {**self._form_data.get(step, {}), **copy.deepcopy(partial)}
        self._write_entry(step, merged)
        return copy.deepcopy(merged)

    def update_form_data(self, step: int, partial: Dict[str, Any]):
        """
        Merge ``partial`` into the step's entry and mark the step dirty if any
        of its keys carries a value different from the previous one.
        """
        previous = DirtyTracker(self._form_data.get(step, {}))
        merged = self.merge_form_data(step, partial)
        changed = previous.changed_keys({key: merged[key] for key in partial})
        if changed:
            logger.debug(f"Step {step} changed keys: {changed}")
            self.set_has_unsaved_changes(step, True)

    def replace_form_data(self, step: int, entry: Dict[str, Any]):
        self._write_entry(step, copy.deepcopy(entry))

    def remove_form_data(self, step: int):
        if step not in self._form_data:
            return
        del self._form_data[step]
        self._sync_collection(step, {})
        self._touch()
        self.form_data_changed.emit(step)

    def _write_entry(self, step: int, entry: Dict[str, Any]):
        key = StepValidator.data_key(step)
        if key is not None and key in entry:
            entry[key] = self._coerce_collection(key, entry[key])
        self._form_data[step] = entry
        self._sync_collection(step, entry)
        self._touch()
        self.form_data_changed.emit(step)

    def _sync_collection(self, step: int, entry: Dict[str, Any]):
        """Mirror the step's canonical bag key into its typed collection."""
        key = StepValidator.data_key(step)
        if key is None:
            return
        _, empty = _COLLECTIONS[key]
        value = copy.deepcopy(entry.get(key, copy.copy(empty)))
        if getattr(self, f"_{key}") != value:
            setattr(self, f"_{key}", value)
            self.collection_changed.emit(key)

    # =========================================================================
    # Typed collections (whole-collection replace)
    # =========================================================================

    def _coerce_item(self, key: str, item: Any) -> Any:
        """The item as its collection's entity type, or None when it cannot be one."""
        entity = _ENTITY_TYPES[key]
        if isinstance(item, entity):
            return item
        if isinstance(item, dict):
            try:
                return entity.from_dict(item)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Dropped malformed {key} item: {e}")
                return None
        logger.warning(f"Dropped {type(item).__name__} from {key}; expected {entity.__name__}")
        return None

    def _coerce_collection(self, key: str, value: Any) -> Any:
        """Convert dict items to entities and drop anything else."""
        if key == "land_basic_info":
            return None if value is None else self._coerce_item(key, value)
        if not isinstance(value, (list, tuple)):
            logger.warning(f"Dropped {type(value).__name__} written as {key}; expected a list")
            return []
        items = [self._coerce_item(key, item) for item in value]
        return [item for item in items if item is not None]

    def _set_collection(self, key: str, value: Any):
        step, _ = _COLLECTIONS[key]
        value = self._coerce_collection(key, value)
        setattr(self, f"_{key}", copy.deepcopy(value))
        entry = dict(self._form_data.get(step, {}))
        entry[key] = copy.deepcopy(value)
        self._form_data[step] = entry
        self._touch()
        self.form_data_changed.emit(step)
        self.collection_changed.emit(key)

    @property
    def land_basic_info(self) -> Optional[LandBasicInfo]:
        return copy.deepcopy(self._land_basic_info)

    def set_land_basic_info(self, info: Optional[LandBasicInfo]):
        self._set_collection("land_basic_info", info)

    @property
    def year_slabs(self) -> List[YearSlab]:
        return copy.deepcopy(self._year_slabs)

    def set_year_slabs(self, slabs: List[YearSlab]):
        self._set_collection("year_slabs", list(slabs))

    @property
    def panipatraks(self) -> List[Panipatrak]:
        return copy.deepcopy(self._panipatraks)

    def set_panipatraks(self, panipatraks: List[Panipatrak]):
        self._set_collection("panipatraks", list(panipatraks))

    @property
    def nondhs(self) -> List[Nondh]:
        return copy.deepcopy(self._nondhs)

    def set_nondhs(self, nondhs: List[Nondh]):
        self._set_collection("nondhs", list(nondhs))

    @property
    def nondh_details(self) -> List[NondhDetail]:
        return copy.deepcopy(self._nondh_details)

    def set_nondh_details(self, details: List[NondhDetail]):
        self._set_collection("nondh_details", list(details))

    # =========================================================================
    # Serialization (drafts)
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context to dictionary."""
        base_data = super().to_dict()
        base_data.update({
            "mode": self._mode,
            "record_id": self._record_id,
            "land_basic_info": self._land_basic_info.to_dict() if self._land_basic_info else None,
            "year_slabs": [s.to_dict() for s in self._year_slabs],
            "panipatraks": [p.to_dict() for p in self._panipatraks],
            "nondhs": [n.to_dict() for n in self._nondhs],
            "nondh_details": [d.to_dict() for d in self._nondh_details],
            "unsaved_changes": {str(k): v for k, v in self._unsaved_changes.items()},
        })
        return base_data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LandRecordContext':
        """Restore context from dictionary."""
        ctx = cls(
            mode=data.get("mode", MODE_ADD),
            record_id=data.get("record_id"),
            step_count=data.get("step_count"),
        )
        cls._restore_base_fields(ctx, data)

        if data.get("land_basic_info"):
            ctx.set_land_basic_info(LandBasicInfo.from_dict(data["land_basic_info"]))
        if data.get("year_slabs"):
            ctx.set_year_slabs([YearSlab.from_dict(s) for s in data["year_slabs"]])
        if data.get("panipatraks"):
            ctx.set_panipatraks([Panipatrak.from_dict(p) for p in data["panipatraks"]])
        if data.get("nondhs"):
            ctx.set_nondhs([Nondh.from_dict(n) for n in data["nondhs"]])
        if data.get("nondh_details"):
            ctx.set_nondh_details([NondhDetail.from_dict(d) for d in data["nondh_details"]])

        for step, value in (data.get("unsaved_changes") or {}).items():
            ctx.set_has_unsaved_changes(int(step), value)

        return ctx
