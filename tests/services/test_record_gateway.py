# -*- coding: utf-8 -*-
"""
Tests for the HTTP record gateway.

requests is patched; no network access is needed.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from services.exceptions import ApiException, NetworkException
from services.record_gateway import CompleteRecord, HttpRecordGateway


def _response(payload=None, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = json.dumps(payload) if payload is not None else ""
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


@pytest.fixture
def gateway():
    return HttpRecordGateway(base_url="http://api.test/api/", token="secret", timeout=5, bucket="docs")


class TestRequests:

    def test_fetch_complete_record(self, gateway):
        payload = {
            "land_record": {"id": "rec-1", "district": "Surat"},
            "year_slabs": [{"id": "s1"}],
            "nondhs": None,
        }
        with patch("services.record_gateway.requests.request", return_value=_response(payload)) as request:
            record = gateway.fetch_complete_record("rec-1")

        assert isinstance(record, CompleteRecord)
        assert record.land_record["district"] == "Surat"
        assert record.year_slabs == [{"id": "s1"}]
        assert record.nondhs == []
        assert record.slab_entries is None

        kwargs = request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "http://api.test/api/v1/LandRecords/rec-1/complete"
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["timeout"] == 5

    def test_fetch_missing_record(self, gateway):
        with patch("services.record_gateway.requests.request", return_value=_response({})):
            with pytest.raises(ApiException) as exc_info:
                gateway.fetch_complete_record("rec-404")
        assert exc_info.value.status_code == 404

    def test_create_then_update(self, gateway):
        with patch("services.record_gateway.requests.request",
                   return_value=_response({"id": "rec-new"})) as request:
            assert gateway.save_land_record({"district": "Surat"}) == {"id": "rec-new"}
            assert request.call_args.kwargs["method"] == "POST"
            assert request.call_args.kwargs["url"].endswith("/v1/LandRecords")

            gateway.save_land_record({"id": "rec-new", "district": "Surat"})
            assert request.call_args.kwargs["method"] == "PUT"
            assert request.call_args.kwargs["url"].endswith("/v1/LandRecords/rec-new")

    @pytest.mark.parametrize("method_name,collection", [
        ("save_year_slabs", "YearSlabs"),
        ("save_panipatraks", "Panipatraks"),
        ("save_nondhs", "Nondhs"),
        ("save_nondh_details", "NondhDetails"),
    ])
    def test_children_replaced_by_parent(self, gateway, method_name, collection):
        rows = [{"id": "x"}]
        with patch("services.record_gateway.requests.request", return_value=_response()) as request:
            assert getattr(gateway, method_name)("rec-1", rows) == {}

        kwargs = request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["url"].endswith(f"/v1/LandRecords/rec-1/{collection}")
        assert kwargs["json"] == rows


class TestErrors:

    def test_http_error(self, gateway):
        response = _response({"error": "duplicate survey number"}, status_code=409)
        with patch("services.record_gateway.requests.request", return_value=response):
            with pytest.raises(ApiException) as exc_info:
                gateway.save_land_record({"district": "Surat"})
        assert exc_info.value.status_code == 409
        assert exc_info.value.response_data == {"error": "duplicate survey number"}

    def test_connection_error(self, gateway):
        with patch("services.record_gateway.requests.request",
                   side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(NetworkException) as exc_info:
                gateway.fetch_complete_record("rec-1")
        assert isinstance(exc_info.value.original_error, requests.exceptions.ConnectionError)

    def test_timeout(self, gateway):
        with patch("services.record_gateway.requests.request",
                   side_effect=requests.exceptions.Timeout("slow")):
            with pytest.raises(NetworkException):
                gateway.save_nondhs("rec-1", [])


class TestUpload:

    def test_upload(self, gateway, tmp_path):
        document = tmp_path / "712.pdf"
        document.write_bytes(b"%PDF-1.4")
        payload = {"public_url": "https://files.example.org/nondh/712.pdf"}

        with patch("services.record_gateway.requests.post", return_value=_response(payload)) as post:
            url = gateway.upload_document(str(document), folder="nondh")

        assert url == payload["public_url"]
        kwargs = post.call_args.kwargs
        assert post.call_args.args[0] == "http://api.test/api/v1/Documents/docs"
        assert kwargs["files"]["path"][1].startswith("nondh/")
        assert kwargs["files"]["path"][1].endswith(".pdf")
        assert "Content-Type" not in kwargs["headers"]

    def test_upload_missing_file(self, gateway, tmp_path):
        with patch("services.record_gateway.requests.post") as post:
            assert gateway.upload_document(str(tmp_path / "missing.pdf")) is None
        post.assert_not_called()

    def test_upload_failure(self, gateway, tmp_path):
        document = tmp_path / "712.pdf"
        document.write_bytes(b"%PDF-1.4")
        with patch("services.record_gateway.requests.post",
                   side_effect=requests.exceptions.ConnectionError("refused")):
            assert gateway.upload_document(str(document)) is None
