"""
Google Drive / Docs document store adapter.

Implements DocumentStorePort:
    listing         Drive v3 files.list (Google Docs only, newest first)
    native read     Docs v1 documents.get, flattened to text
    exports         authenticated HTTP GET on the export URLs (requests)
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import requests
from googleapiclient.errors import HttpError

from adapters.google_auth import bearer_token, build_service
from domain.models import DocumentSummary, ExportEndpoint, ExportFormat
from shared_utils.constants import Defaults, GoogleEndpoints, LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.ADAPTER)

_EXPORT_URLS = {
    (ExportEndpoint.PRIMARY, ExportFormat.TEXT): GoogleEndpoints.DOCS_EXPORT_TEXT,
    (ExportEndpoint.PRIMARY, ExportFormat.HTML): GoogleEndpoints.DOCS_EXPORT_HTML,
    (ExportEndpoint.SECONDARY, ExportFormat.TEXT): GoogleEndpoints.DRIVE_EXPORT_TEXT,
    (ExportEndpoint.SECONDARY, ExportFormat.HTML): GoogleEndpoints.DRIVE_EXPORT_HTML,
}


def flatten_document_text(document: Dict[str, Any]) -> str:
    """Concatenate the text runs of a Docs v1 document body, tables included."""
    return _flatten_content(document.get("body", {}).get("content", []))


def _flatten_content(content: List[Dict[str, Any]]) -> str:
    parts: List[str] = []
    for element in content:
        if "paragraph" in element:
            for run in element["paragraph"].get("elements", []):
                parts.append(run.get("textRun", {}).get("content", ""))
        elif "table" in element:
            for row in element["table"].get("tableRows", []):
                for cell in row.get("tableCells", []):
                    parts.append(_flatten_content(cell.get("content", [])))
        elif "tableOfContents" in element:
            parts.append(_flatten_content(element["tableOfContents"].get("content", [])))
    return "".join(parts)


class GoogleDriveDocumentStore:
    """Drive/Docs implementation of DocumentStorePort."""

    PAGE_SIZE = 100

    def __init__(
        self,
        credentials: Any = None,
        drive_service: Optional[Any] = None,
        docs_service: Optional[Any] = None,
        http_session: Optional[requests.Session] = None,
        timeout: float = Defaults.REQUEST_TIMEOUT,
    ) -> None:
        self._credentials = credentials
        self._drive = drive_service or build_service("drive", "v3", credentials)
        self._docs = docs_service or build_service("docs", "v1", credentials)
        self._http = http_session or requests.Session()
        self._timeout = timeout

    # ------------------------------------------------------------------
    # DocumentStorePort implementation
    # ------------------------------------------------------------------

    def has_listing_access(self) -> bool:
        try:
            self._drive.files().list(
                q=self._query(None),
                pageSize=1,
                fields="files(id)",
            ).execute()
            return True
        except HttpError as exc:
            logger.warning("drive_listing_unavailable", error=str(exc))
            return False

    def is_scope_accessible(self, scope: str) -> bool:
        try:
            meta = self._drive.files().get(fileId=scope, fields="id, mimeType").execute()
        except HttpError as exc:
            logger.warning("drive_folder_inaccessible", folder_id=scope, error=str(exc))
            return False
        return meta.get("mimeType") == GoogleEndpoints.FOLDER_MIME_TYPE

    def list_documents(self, scope: Optional[str] = None) -> Iterator[DocumentSummary]:
        """Page through Google Docs lazily, most recently modified first."""
        request_kwargs: Dict[str, Any] = {
            "q": self._query(scope),
            "orderBy": "modifiedTime desc,name",
            "pageSize": self.PAGE_SIZE,
            "fields": "nextPageToken, files(id, name, modifiedTime)",
        }
        while True:
            try:
                response = self._drive.files().list(**request_kwargs).execute()
            except HttpError as exc:
                logger.error("drive_list_failed", scope=scope, error=str(exc))
                raise ExternalServiceError("Google Drive", f"Failed to list documents: {exc}") from exc

            for item in response.get("files", []):
                yield DocumentSummary(
                    id=item["id"],
                    name=item.get("name", ""),
                    last_modified=item["modifiedTime"],
                )

            page_token = response.get("nextPageToken")
            if not page_token:
                return
            request_kwargs["pageToken"] = page_token

    def get_document_text(self, document_id: str) -> str:
        try:
            document = self._docs.documents().get(documentId=document_id).execute()
        except HttpError as exc:
            raise ExternalServiceError("Google Docs", f"Failed to open document: {exc}") from exc
        return flatten_document_text(document)

    def fetch_export(
        self,
        document_id: str,
        export_format: ExportFormat,
        endpoint: ExportEndpoint = ExportEndpoint.PRIMARY,
    ) -> str:
        url = _EXPORT_URLS[(endpoint, export_format)].format(document_id=document_id)
        if self._credentials is None:
            raise ExternalServiceError("Google export", "no credentials for export requests")
        try:
            response = self._http.get(
                url,
                headers={"Authorization": f"Bearer {bearer_token(self._credentials)}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ExternalServiceError(
                "Google export",
                f"{export_format.value} export failed: {exc}",
                context={"document_id": document_id, "endpoint": endpoint.value},
            ) from exc
        return response.text

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _query(scope: Optional[str]) -> str:
        query = f"mimeType = '{GoogleEndpoints.DOCUMENT_MIME_TYPE}' and trashed = false"
        if scope:
            query += f" and '{scope}' in parents"
        return query
