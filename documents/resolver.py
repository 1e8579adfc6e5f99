"""
documents/resolver.py

Finds the Google Docs attached to a set of submissions, downloads them with
the Docs API and flattens their body into plain text.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Optional

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from assignments.errors import ContentExtractionFailure
from assignments.filters import is_document_link
from assignments.sources import DocumentHandle
from classroom.client import authorized_http
from classroom.models import StudentSubmission

logger = logging.getLogger("documents.resolver")

DOCUMENT_ID_PATTERN = re.compile(r"/document/(?:u/\d+/)?d/([A-Za-z0-9_-]+)")


def document_id_from_link(link: Optional[str]) -> Optional[str]:
    if not link:
        return None
    match = DOCUMENT_ID_PATTERN.search(link)
    return match.group(1) if match else None


def collect_document_handles(submissions: list[StudentSubmission]) -> list[DocumentHandle]:
    """Document attachments across all submissions, first occurrence wins."""
    handles: dict[str, DocumentHandle] = {}
    for submission in submissions:
        for attachment in submission.attachments:
            drive_file = attachment.drive_file
            if drive_file is None or not is_document_link(drive_file.alternate_link):
                continue
            document_id = document_id_from_link(drive_file.alternate_link) or drive_file.id
            if not document_id:
                logger.warning("Document link without an id: %s", drive_file.alternate_link)
                continue
            if document_id in handles:
                continue
            handles[document_id] = DocumentHandle(
                document_id=document_id,
                title=drive_file.title,
                link=drive_file.alternate_link,
            )
    return list(handles.values())


def _read_paragraph_element(element: dict[str, Any]) -> str:
    text_run = element.get("textRun")
    if not text_run:
        return ""
    return text_run.get("content", "")


def read_structural_elements(elements: list[dict[str, Any]]) -> str:
    text = []
    for value in elements:
        if "paragraph" in value:
            for element in value["paragraph"].get("elements", []):
                text.append(_read_paragraph_element(element))
        elif "table" in value:
            for row in value["table"].get("tableRows", []):
                for cell in row.get("tableCells", []):
                    text.append(read_structural_elements(cell.get("content", [])))
        elif "tableOfContents" in value:
            text.append(read_structural_elements(value["tableOfContents"].get("content", [])))
    return "".join(text)


class GoogleDocumentResolver:
    def __init__(self, docs_service, credentials):
        self.service = docs_service
        self.credentials = credentials

    def _get_document(self, document_id: str) -> dict[str, Any]:
        http = authorized_http(self.credentials)
        return self.service.documents().get(documentId=document_id).execute(http=http)

    async def _fetch(self, handle: DocumentHandle) -> DocumentHandle:
        try:
            handle.body = await asyncio.to_thread(self._get_document, handle.document_id)
        except (HttpError, RefreshError) as exc:
            logger.warning("Failed to fetch document %s: %s", handle.document_id, exc)
            handle.error = str(exc)
            return handle
        handle.title = handle.body.get("title") or handle.title
        return handle

    async def fetch_documents(self, submissions: list[StudentSubmission]) -> list[DocumentHandle]:
        handles = collect_document_handles(submissions)
        logger.info("Fetching %d document(s)", len(handles))
        return list(await asyncio.gather(*(self._fetch(handle) for handle in handles)))

    async def extract_content(self, handle: DocumentHandle) -> str:
        if handle.error:
            raise ContentExtractionFailure(handle.document_id, handle.error)
        if not handle.body:
            raise ContentExtractionFailure(handle.document_id, "document was not fetched")
        body = handle.body.get("body")
        if not isinstance(body, dict):
            raise ContentExtractionFailure(handle.document_id, "document has no body")
        return read_structural_elements(body.get("content", []))
