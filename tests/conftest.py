# -*- coding: utf-8 -*-
"""
Shared fixtures for the land record wizard tests.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import copy
import uuid

import pytest

from models import AreaInput, LandBasicInfo, Nondh, NondhDetail, Panipatrak, Farmer, YearSlab
from services.exceptions import ApiException
from services.record_gateway import CompleteRecord, RecordGateway
from ui.wizards.land_record import LandRecordContext, MODE_ADD


class InMemoryGateway(RecordGateway):
    """RecordGateway keeping rows in dicts; ``fail_on`` names methods that raise."""

    def __init__(self):
        self.records = {}
        self.children = {}
        self.calls = []
        self.fail_on = set()
        self.uploads = {}

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise ApiException(f"{name} failed", status_code=500, context=name)

    def fetch_complete_record(self, record_id):
        self._call("fetch_complete_record", record_id)
        if record_id not in self.records:
            raise ApiException(f"Land record {record_id} not found", status_code=404)
        return copy.deepcopy(self.records[record_id])

    def save_land_record(self, row):
        self._call("save_land_record", row)
        row = dict(row)
        row.setdefault("id", str(uuid.uuid4()))
        self.records[row["id"]] = CompleteRecord(land_record=row)
        return row

    def _replace(self, name, collection, record_id, rows):
        self._call(name, record_id, rows)
        self.children[(record_id, collection)] = copy.deepcopy(rows)
        return {"count": len(rows)}

    def save_year_slabs(self, record_id, rows):
        return self._replace("save_year_slabs", "year_slabs", record_id, rows)

    def save_panipatraks(self, record_id, rows):
        return self._replace("save_panipatraks", "panipatraks", record_id, rows)

    def save_nondhs(self, record_id, rows):
        return self._replace("save_nondhs", "nondhs", record_id, rows)

    def save_nondh_details(self, record_id, rows):
        return self._replace("save_nondh_details", "nondh_details", record_id, rows)

    def upload_document(self, file_path, folder="uploads"):
        self.calls.append(("upload_document", file_path, folder))
        if "upload_document" in self.fail_on:
            return None
        url = f"https://files.example.org/{folder}/{os.path.basename(file_path)}"
        self.uploads[file_path] = url
        return url

    def called(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def context():
    """A fresh add-mode land record context."""
    ctx = LandRecordContext(mode=MODE_ADD)
    yield ctx
    if ctx.is_active:
        ctx.dispose()


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def land_info():
    return LandBasicInfo(
        district="Ahmedabad",
        taluka="Daskroi",
        village="Bopal",
        area=AreaInput(value=2.5, unit="acre"),
        s_no="123/A",
    )


@pytest.fixture
def year_slab():
    return YearSlab(
        id="slab-1",
        start_year=1995,
        end_year=2005,
        s_no="123/A",
        area=AreaInput(value=2.5, unit="acre"),
    )


@pytest.fixture
def panipatrak(year_slab):
    return Panipatrak(
        slab_id=year_slab.id,
        s_no="123/A",
        year=1998,
        farmers=[Farmer(id="f-1", name="Ramesh Patel", area=AreaInput(1.0, "acre"))],
    )


@pytest.fixture
def nondh():
    return Nondh(id="nondh-1", number=42, affected_s_nos=["123/A"])


@pytest.fixture
def nondh_detail(nondh):
    return NondhDetail(id="detail-1", nondh_id=nondh.id, s_no="123/A", type="Varsai",
                       vigat="Inheritance after death of owner")
