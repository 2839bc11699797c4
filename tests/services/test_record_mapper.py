# -*- coding: utf-8 -*-
"""
Tests for the persistence mapping layer.
"""

import pytest

from models import AreaInput, NondhDetail, OwnerRelation, SlabEntry, YearSlab
from models.nondh_detail import STATUS_INVALID, STATUS_NULLIFIED, STATUS_VALID
from services import record_mapper as mapper
from services.exceptions import ValidationException
from services.validation import EntryCountPolicy


@pytest.fixture
def slab_with_entries():
    return YearSlab(
        id="slab-9",
        start_year=1980,
        end_year=1990,
        s_no="77",
        area=AreaInput(40, "guntha"),
        paiky=True,
        paiky_count=3,
        paiky_entries=[
            SlabEntry(s_no="77/1", area=AreaInput(10, "guntha")),
            SlabEntry(s_no="77/2"),
            SlabEntry(),  # empty, dropped on save
        ],
        ekatrikaran=False,
        ekatrikaran_count=0,
        ekatrikaran_entries=[SlabEntry(s_no="80")],
    )


class TestLandRecordRows:

    def test_row_columns(self, land_info):
        row = mapper.land_basic_info_to_row(land_info, record_id="rec-1", current_step=3)
        assert row["id"] == "rec-1"
        assert row["area_value"] == 2.5
        assert row["area_unit"] == "acre"
        assert row["current_step"] == 3
        assert row["status"] == "draft"

    def test_new_record_has_no_id(self, land_info):
        assert "id" not in mapper.land_basic_info_to_row(land_info)

    def test_read_back(self, land_info):
        row = mapper.land_basic_info_to_row(land_info, record_id="rec-1")
        assert mapper.row_to_land_basic_info(row) == land_info

    def test_missing_columns(self):
        with pytest.raises(ValidationException) as exc_info:
            mapper.row_to_land_basic_info({"district": "Surat"})
        assert set(exc_info.value.errors) == {"taluka", "village", "s_no_type"}


class TestYearSlabRows:

    def test_empty_entries_dropped(self, slab_with_entries):
        row = mapper.year_slab_to_row(slab_with_entries)
        assert [e["s_no"] for e in row["paiky_entries"]] == ["77/1", "77/2"]
        assert all(e["entry_type"] == "paiky" for e in row["paiky_entries"])

    def test_reject_keeps_declared_count(self, slab_with_entries):
        row = mapper.year_slab_to_row(slab_with_entries, EntryCountPolicy.REJECT)
        assert row["paiky_count"] == 3

    def test_reconcile_rewrites_count(self, slab_with_entries):
        row = mapper.year_slab_to_row(slab_with_entries, EntryCountPolicy.RECONCILE)
        assert row["paiky_count"] == 2

    def test_unflagged_entries_kept(self, slab_with_entries):
        row = mapper.year_slab_to_row(slab_with_entries, EntryCountPolicy.RECONCILE)
        assert row["ekatrikaran_count"] == 0
        assert [e["s_no"] for e in row["ekatrikaran_entries"]] == ["80"]

    def test_nested_entries_read_back(self, slab_with_entries):
        row = mapper.year_slab_to_row(slab_with_entries)
        slab = mapper.row_to_year_slab(row)
        assert slab.area == AreaInput(40, "guntha")
        assert len(slab.paiky_entries) == 2
        assert slab.paiky_entries[0].area == AreaInput(10, "guntha")

    def test_flat_entry_rows(self):
        row = {"id": "s1", "start_year": 2001, "end_year": 2003, "paiky": True, "paiky_count": 1}
        entry_rows = [
            {"year_slab_id": "s1", "entry_type": "paiky", "s_no": "9/1"},
            {"year_slab_id": "s1", "entry_type": "ekatrikaran", "s_no": "12"},
            {"year_slab_id": "other", "entry_type": "paiky", "s_no": "3"},
        ]
        slab = mapper.row_to_year_slab(row, entry_rows)
        assert [e.s_no for e in slab.paiky_entries] == ["9/1"]
        assert [e.s_no for e in slab.ekatrikaran_entries] == ["12"]

    def test_missing_years(self):
        with pytest.raises(ValidationException):
            mapper.row_to_year_slab({"id": "s1"})


class TestChildRows:

    def test_panipatrak(self, panipatrak):
        row = mapper.panipatrak_to_row(panipatrak)
        assert row["year_slab_id"] == "slab-1"
        assert row["farmers"][0]["area_unit"] == "acre"

        restored = mapper.row_to_panipatrak(row)
        assert restored.slab_id == panipatrak.slab_id
        assert restored.farmers[0].name == "Ramesh Patel"
        assert restored.farmers[0].area == AreaInput(1.0, "acre")

    def test_nondh(self, nondh):
        nondh.nondh_doc = "https://files.example.org/nondh/42.pdf"
        row = mapper.nondh_to_row(nondh)
        assert row["nondh_doc_url"] == nondh.nondh_doc
        assert mapper.row_to_nondh(row) == nondh

    def test_owner_relation_restraining_order(self):
        relation = OwnerRelation(owner_name="Kiran", restraining_order=True)
        row = mapper.owner_relation_to_row(relation)
        assert row["restraining_order"] == "yes"
        assert mapper.row_to_owner_relation(row).restraining_order is True

        relation.restraining_order = None
        assert mapper.owner_relation_to_row(relation)["restraining_order"] is None

    def test_nondh_detail_uses_db_id(self, nondh_detail):
        nondh_detail.db_id = "db-77"
        row = mapper.nondh_detail_to_row(nondh_detail)
        assert row["id"] == "db-77"

    def test_nondh_detail_reason_only_when_not_valid(self, nondh_detail):
        nondh_detail.invalid_reason = "stale"
        assert mapper.nondh_detail_to_row(nondh_detail)["invalid_reason"] is None
        nondh_detail.status = STATUS_INVALID
        assert mapper.nondh_detail_to_row(nondh_detail)["invalid_reason"] == "stale"

    def test_nondh_detail_read_back(self, nondh_detail):
        nondh_detail.owner_relations = [OwnerRelation(owner_name="Asha", is_valid=False)]
        detail = mapper.row_to_nondh_detail(mapper.nondh_detail_to_row(nondh_detail))
        assert isinstance(detail, NondhDetail)
        assert detail.db_id == nondh_detail.id
        assert detail.type == "Varsai"
        assert detail.owner_relations[0].is_valid is False


class TestStatusAliases:

    @pytest.mark.parametrize("value,expected", [
        ("valid", STATUS_VALID),
        ("Pramanik", STATUS_VALID),
        ("radd", STATUS_INVALID),
        ("na_manjoor", STATUS_NULLIFIED),
        (None, STATUS_VALID),
        ("", STATUS_VALID),
    ])
    def test_normalize(self, value, expected):
        assert mapper.normalize_status(value) == expected

    def test_unknown_status(self):
        with pytest.raises(ValidationException):
            mapper.normalize_status("pending")


class TestColumnTypes:

    def test_non_numeric_number(self, nondh):
        row = mapper.nondh_to_row(nondh)
        row["number"] = "12A"
        with pytest.raises(ValidationException) as exc_info:
            mapper.row_to_nondh(row)
        assert exc_info.value.field == "number"

    def test_numeric_text_accepted(self, nondh):
        row = mapper.nondh_to_row(nondh)
        row["number"] = "42"
        assert mapper.row_to_nondh(row).number == 42

    def test_non_text_status(self):
        with pytest.raises(ValidationException):
            mapper.normalize_status(1)

    def test_boolean_year_rejected(self):
        with pytest.raises(ValidationException):
            mapper.row_to_year_slab({"id": "s1", "start_year": True, "end_year": 2000})

    def test_row_must_be_mapping(self):
        with pytest.raises(ValidationException):
            mapper.row_to_nondh(["n1", 4])

    @pytest.mark.parametrize("value,expected", [(None, 1), (4, 4), ("3", 3), (0, 1), (11, 6), (-2, 1)])
    def test_current_step(self, value, expected):
        assert mapper.row_current_step({"current_step": value}, 6) == expected

    def test_current_step_not_numeric(self):
        with pytest.raises(ValidationException):
            mapper.row_current_step({"current_step": "four"}, 6)
