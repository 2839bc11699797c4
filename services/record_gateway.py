# -*- coding: utf-8 -*-
"""
Record Persistence Gateway - contract and HTTP implementation.

The wizard core only depends on RecordGateway. Collection saves replace all
children of the land record (delete then re-insert), so callers always pass
the complete current collection.
"""

import json as _json
import mimetypes
import os
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from services.exceptions import ApiException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CompleteRecord:
    """Everything persisted for one land record, as raw rows."""
    land_record: Dict[str, Any]
    year_slabs: List[Dict[str, Any]] = field(default_factory=list)
    slab_entries: Optional[List[Dict[str, Any]]] = None
    panipatraks: List[Dict[str, Any]] = field(default_factory=list)
    nondhs: List[Dict[str, Any]] = field(default_factory=list)
    nondh_details: List[Dict[str, Any]] = field(default_factory=list)


class RecordGateway(ABC):
    """Persistence operations consumed by the land record controller."""

    @abstractmethod
    def fetch_complete_record(self, record_id: str) -> CompleteRecord:
        """Fetch a land record with all of its child collections."""
        pass

    @abstractmethod
    def save_land_record(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Create (no ``id``) or update the land record row; returns the saved row."""
        pass

    @abstractmethod
    def save_year_slabs(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def save_panipatraks(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def save_nondhs(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def save_nondh_details(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def upload_document(self, file_path: str, folder: str = "uploads") -> Optional[str]:
        """Upload a supporting document; returns its public URL or None on failure."""
        pass


class HttpRecordGateway(RecordGateway):
    """
    RecordGateway over the land records REST API.

    Usage:
        gateway = HttpRecordGateway()  # reads Config
        record = gateway.fetch_complete_record(record_id)
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: Optional[int] = None, bucket: Optional[str] = None):
        from app.config import Config

        self.base_url = (base_url or Config.API_BASE_URL).rstrip('/')
        self.api_version = Config.API_VERSION
        self.token = token if token is not None else Config.API_TOKEN
        self.timeout = timeout or Config.API_TIMEOUT
        self.bucket = bucket or Config.DOCUMENT_BUCKET
        self.upload_field = Config.DOCUMENT_UPLOAD_FIELD

    def _headers(self, json_body: bool = True) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _endpoint(self, path: str) -> str:
        return f"/{self.api_version}{path}"

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Any] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request with error handling.

        Raises:
            ApiException: on HTTP error status
            NetworkException: on connection failures and timeouts
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if json_data is not None:
            logger.debug(f"[API REQ] Body: {_json.dumps(json_data, ensure_ascii=False, default=str)[:1000]}")

        try:
            response = requests.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()

            result = None
            if response.text:
                result = response.json()

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data,
                context=endpoint
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e, context=endpoint)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e, context=endpoint)

    # ==================== Land records ====================

    def fetch_complete_record(self, record_id: str) -> CompleteRecord:
        data = self._request("GET", self._endpoint(f"/LandRecords/{record_id}/complete"))
        if not data or not data.get("land_record"):
            raise ApiException(f"Land record {record_id} not found", status_code=404,
                               context="fetch_complete_record")
        return CompleteRecord(
            land_record=data["land_record"],
            year_slabs=data.get("year_slabs") or [],
            slab_entries=data.get("slab_entries"),
            panipatraks=data.get("panipatraks") or [],
            nondhs=data.get("nondhs") or [],
            nondh_details=data.get("nondh_details") or [],
        )

    def save_land_record(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if row.get("id"):
            result = self._request("PUT", self._endpoint(f"/LandRecords/{row['id']}"), json_data=row)
        else:
            result = self._request("POST", self._endpoint("/LandRecords"), json_data=row)
        return result or {}

    def _replace_children(self, record_id: str, collection: str,
                          rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        result = self._request(
            "PUT",
            self._endpoint(f"/LandRecords/{record_id}/{collection}"),
            json_data=rows
        )
        return result or {}

    def save_year_slabs(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._replace_children(record_id, "YearSlabs", rows)

    def save_panipatraks(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._replace_children(record_id, "Panipatraks", rows)

    def save_nondhs(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._replace_children(record_id, "Nondhs", rows)

    def save_nondh_details(self, record_id: str, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._replace_children(record_id, "NondhDetails", rows)

    # ==================== Documents ====================

    def upload_document(self, file_path: str, folder: str = "uploads") -> Optional[str]:
        """
        Upload a document via multipart/form-data.

        Endpoint: POST /api/v1/Documents/{bucket}
        """
        if not file_path or not os.path.exists(file_path):
            logger.error(f"Upload error: file not found: {file_path}")
            return None

        endpoint = self._endpoint(f"/Documents/{self.bucket}")
        file_name = os.path.basename(file_path)
        ext = os.path.splitext(file_name)[1]
        storage_path = f"{folder}/{uuid.uuid4()}{ext}"
        mime_type = mimetypes.guess_type(file_path)[0] or "application/octet-stream"

        logger.info(f"[API REQ] POST {endpoint} File: {file_name} ({mime_type})")

        try:
            with open(file_path, "rb") as f:
                files = {
                    self.upload_field: (file_name, f, mime_type),
                    "path": (None, storage_path),
                }
                response = requests.post(
                    f"{self.base_url}{endpoint}",
                    files=files,
                    headers=self._headers(json_body=False),
                    timeout=self.timeout,
                )
            response.raise_for_status()
            result = response.json() if response.text else {}
            url = result.get("public_url")
            logger.info(f"[API RES] {response.status_code} {endpoint} -> {url}")
            return url
        except requests.exceptions.RequestException as e:
            logger.error(f"Upload error: {file_name} - {e}")
            return None
