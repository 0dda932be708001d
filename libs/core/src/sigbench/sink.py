from __future__ import annotations
"""Remote report sink.

Uploads happen after the report has been printed and never inside a timed
region. The upload client is built from credentials handed to the
constructor rather than from process-wide environment state.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import requests
from google.api_core import exceptions as gexc
from google.auth import exceptions as auth_exc
from google.cloud import storage

from .config import BenchConfig
from .errors import UploadError

log = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"


class ReportSink(Protocol):
    def upload(self, filename: str, body: bytes) -> str: ...


class GcsReportSink:
    """Google Cloud Storage sink using explicit service-account info."""

    def __init__(self, credentials_info: Dict[str, Any], bucket: str, client: Any = None) -> None:
        self._credentials_info = credentials_info
        self.bucket = bucket
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            try:
                self._client = storage.Client.from_service_account_info(self._credentials_info)
            except (ValueError, KeyError) as exc:
                raise UploadError(f"invalid service account credentials: {exc}") from exc
        return self._client

    def upload(self, filename: str, body: bytes) -> str:
        client = self._get_client()
        try:
            blob = client.bucket(self.bucket).blob(filename)
            blob.upload_from_string(body, content_type=CONTENT_TYPE)
        except (gexc.GoogleAPIError, auth_exc.GoogleAuthError, requests.RequestException) as exc:
            raise UploadError(f"upload of {filename} to bucket {self.bucket} failed: {exc}") from exc
        location = f"gs://{self.bucket}/{filename}"
        log.info("uploaded report to %s", location)
        return location


def build_sink(config: BenchConfig) -> Optional[ReportSink]:
    """Return the configured sink, or None when no credentials were supplied."""
    if not config.upload_enabled:
        return None
    return GcsReportSink(config.credentials or {}, config.bucket)
