from __future__ import annotations

import logging
from typing import Any

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from assignments.errors import SourceUnavailable

logger = logging.getLogger("documents.drive")

NOT_A_FOLDER = "mimeType != 'application/vnd.google-apps.folder'"


def list_files(
    service,
    limit: int = 1000,
    query: str = NOT_A_FOLDER,
    order_by: str = "modifiedByMeTime desc",
) -> list[dict[str, Any]]:
    files: list[dict[str, Any]] = []
    page_token = None
    while len(files) < limit:
        try:
            response = service.files().list(
                q=query,
                orderBy=order_by,
                pageSize=min(limit - len(files), 1000),
                pageToken=page_token,
                fields="nextPageToken, files(id, name, mimeType)",
            ).execute()
        except (HttpError, RefreshError) as exc:
            raise SourceUnavailable("list_drive_files", reason=str(exc)) from exc
        files.extend(response.get("files", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            break
    logger.debug("Listed %d Drive file(s)", len(files))
    return files[:limit]
