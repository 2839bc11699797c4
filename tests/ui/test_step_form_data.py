# -*- coding: utf-8 -*-
"""
Tests for StepFormData (per-step accessor with snapshot change tracking).
"""

import pytest

from models import AreaInput, Farmer, Panipatrak
from services.exceptions import RecordContextError
from ui.wizards.land_record import StepFormData


@pytest.fixture
def second_panipatrak(year_slab):
    return Panipatrak(
        slab_id=year_slab.id,
        s_no="123/A",
        year=1999,
        farmers=[Farmer(id="f-2", name="Suresh Shah", area=AreaInput(10, "guntha"))],
    )


@pytest.fixture
def loaded_step(context, panipatrak):
    """Step 3 accessor over a context holding one panipatrak."""
    context.set_panipatraks([panipatrak])
    accessor = StepFormData(context, 3)
    accessor.get_step_data()
    return accessor


class TestSnapshot:
    """Test snapshot capture and dirty-ness."""

    def test_first_load_is_clean(self, loaded_step, panipatrak):
        assert loaded_step.has_snapshot
        assert loaded_step.snapshot == {"panipatraks": [panipatrak]}
        assert not loaded_step.has_unsaved_changes

    def test_update_makes_step_dirty(self, loaded_step, context, panipatrak, second_panipatrak):
        loaded_step.update_step_data({"panipatraks": [panipatrak, second_panipatrak]})
        assert loaded_step.has_unsaved_changes
        assert context.has_unsaved_changes(3)
        assert context.panipatraks == [panipatrak, second_panipatrak]

    def test_update_back_to_snapshot_is_clean(self, loaded_step, context, panipatrak, second_panipatrak):
        loaded_step.update_step_data({"panipatraks": [panipatrak, second_panipatrak]})
        loaded_step.update_step_data({"panipatraks": [panipatrak]})
        assert not loaded_step.has_unsaved_changes
        assert not context.has_unsaved_changes(3)

    def test_snapshot_taken_only_once(self, loaded_step, context, panipatrak, second_panipatrak):
        context.set_panipatraks([second_panipatrak])
        loaded_step.get_step_data()
        assert loaded_step.snapshot == {"panipatraks": [panipatrak]}

    def test_get_returns_copy(self, loaded_step, context):
        data = loaded_step.get_step_data()
        data["panipatraks"].clear()
        assert len(context.panipatraks) == 1

    def test_without_snapshot_non_empty_is_dirty(self, context):
        accessor = StepFormData(context, 4)
        accessor.update_step_data({"notes": "draft"})
        assert accessor.has_unsaved_changes

    def test_without_snapshot_empty_is_clean(self, context):
        accessor = StepFormData(context, 4)
        accessor.update_step_data({})
        assert not accessor.has_unsaved_changes

    def test_current_data(self, loaded_step, panipatrak, second_panipatrak):
        loaded_step.update_step_data({"panipatraks": [second_panipatrak]})
        assert loaded_step.current_data == {"panipatraks": [second_panipatrak]}


class TestSaveAndRevert:
    """Test mark_as_saved, revert_to_original and reset_step_data."""

    def test_mark_as_saved_rebases(self, loaded_step, panipatrak, second_panipatrak):
        loaded_step.update_step_data({"panipatraks": [panipatrak, second_panipatrak]})
        loaded_step.mark_as_saved()

        assert not loaded_step.has_unsaved_changes
        assert loaded_step.snapshot == {"panipatraks": [panipatrak, second_panipatrak]}

        loaded_step.update_step_data({"panipatraks": [panipatrak]})
        assert loaded_step.has_unsaved_changes

    def test_revert_after_save_restores_saved_state(self, context, panipatrak, second_panipatrak):
        accessor = StepFormData(context, 3)
        assert accessor.get_step_data() == {}

        accessor.update_step_data({"panipatraks": [panipatrak]})
        accessor.mark_as_saved()
        accessor.update_step_data({"panipatraks": [second_panipatrak]})
        accessor.revert_to_original()

        assert context.get_form_data(3) == {"panipatraks": [panipatrak]}
        assert context.panipatraks == [panipatrak]
        assert not accessor.has_unsaved_changes

    def test_revert_right_after_save(self, context, panipatrak):
        accessor = StepFormData(context, 3)
        accessor.get_step_data()
        accessor.update_step_data({"panipatraks": [panipatrak]})
        accessor.mark_as_saved()

        accessor.revert_to_original()

        assert context.get_form_data(3) == {"panipatraks": [panipatrak]}
        assert not context.has_unsaved_changes(3)

    def test_revert_restores_snapshot(self, loaded_step, context, panipatrak, second_panipatrak):
        loaded_step.update_step_data({"panipatraks": [second_panipatrak]})
        loaded_step.revert_to_original()

        assert context.get_form_data(3) == {"panipatraks": [panipatrak]}
        assert context.panipatraks == [panipatrak]
        assert not loaded_step.has_unsaved_changes

    def test_revert_without_snapshot_is_noop(self, context):
        accessor = StepFormData(context, 3)
        context.update_form_data(3, {"notes": "kept"})

        accessor.revert_to_original()

        assert context.get_form_data(3) == {"notes": "kept"}
        assert context.has_unsaved_changes(3)

    def test_reset_removes_entry(self, loaded_step, context, second_panipatrak):
        loaded_step.update_step_data({"panipatraks": [second_panipatrak]})
        loaded_step.reset_step_data()

        assert context.get_form_data(3) == {}
        assert context.panipatraks == []
        assert not loaded_step.has_unsaved_changes
        assert not loaded_step.has_snapshot

    def test_reset_rearms_snapshot(self, loaded_step, context, second_panipatrak):
        loaded_step.reset_step_data()
        context.set_panipatraks([second_panipatrak])

        loaded_step.get_step_data()

        assert loaded_step.snapshot == {"panipatraks": [second_panipatrak]}


class TestSharedFlag:
    """The context flag is shared with other writers."""

    def test_two_accessors_share_flag(self, context, panipatrak):
        first = StepFormData(context, 3)
        second = StepFormData(context, 3)
        first.get_step_data()
        second.get_step_data()

        first.update_step_data({"panipatraks": [panipatrak]})

        assert second.has_unsaved_changes

    def test_context_update_visible_to_accessor(self, loaded_step, context):
        context.update_form_data(3, {"notes": "typed"})
        assert loaded_step.has_unsaved_changes


class TestMisuse:
    """Test accessor wiring errors."""

    def test_requires_context(self):
        with pytest.raises(RecordContextError):
            StepFormData(None, 1)

    def test_disposed_context_at_construction(self, context):
        context.dispose()
        with pytest.raises(RecordContextError):
            StepFormData(context, 1)

    def test_disposed_context_after_construction(self, context):
        accessor = StepFormData(context, 1)
        context.dispose()
        with pytest.raises(RecordContextError):
            accessor.get_step_data()
        with pytest.raises(RecordContextError):
            accessor.update_step_data({"a": 1})
