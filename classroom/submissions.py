from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from assignments.errors import SourceUnavailable
from classroom.client import authorized_http
from classroom.models import StudentSubmission

logger = logging.getLogger("classroom.submissions")

# Google rejects batch requests with more than 1000 calls.
BATCH_LIMIT = 1000


class ClassroomSubmissionSource:
    """
    Lists student submissions for many coursework items of one course using
    Google's batch HTTP endpoint, so a course costs one round trip.
    """

    def __init__(self, service, credentials, page_size: int = 100):
        self.service = service
        self.credentials = credentials
        self.page_size = page_size

    async def fetch_batch(
        self, course_id: str, course_work_ids: list[str]
    ) -> dict[str, list[StudentSubmission]]:
        if not course_work_ids:
            return {}
        raw = await asyncio.to_thread(self._fetch_blocking, course_id, course_work_ids)
        return {
            work_id: [StudentSubmission.from_api(item) for item in items]
            for work_id, items in raw.items()
        }

    def _list_request(self, course_id: str, course_work_id: str, page_token: str | None = None):
        return self.service.courses().courseWork().studentSubmissions().list(
            courseId=course_id,
            courseWorkId=course_work_id,
            pageSize=self.page_size,
            pageToken=page_token,
        )

    def _fetch_blocking(self, course_id: str, course_work_ids: list[str]) -> dict[str, list[dict[str, Any]]]:
        ids = list(dict.fromkeys(course_work_ids))
        http = authorized_http(self.credentials)

        found: dict[str, list[dict[str, Any]]] = {}
        next_pages: dict[str, str] = {}
        errors: list[tuple[str, Exception]] = []

        def _callback(request_id: str, response: dict[str, Any], exception: Exception | None) -> None:
            if exception is not None:
                if isinstance(exception, HttpError) and exception.resp.status == 404:
                    logger.info("Coursework not found course_id=%s course_work_id=%s", course_id, request_id)
                    return
                errors.append((request_id, exception))
                return
            found.setdefault(request_id, []).extend(response.get("studentSubmissions", []))
            token = response.get("nextPageToken")
            if token:
                next_pages[request_id] = token

        for start in range(0, len(ids), BATCH_LIMIT):
            batch = self.service.new_batch_http_request(callback=_callback)
            for work_id in ids[start:start + BATCH_LIMIT]:
                batch.add(self._list_request(course_id, work_id), request_id=work_id)
            try:
                batch.execute(http=http)
            except (HttpError, RefreshError) as exc:
                raise SourceUnavailable(
                    "list_student_submissions", course_id=course_id, reason=str(exc)
                ) from exc

        if errors:
            work_id, exc = errors[0]
            raise SourceUnavailable(
                "list_student_submissions",
                course_id=course_id,
                course_work_id=work_id,
                reason=str(exc),
            ) from exc

        for work_id, page_token in next_pages.items():
            while page_token:
                try:
                    response = self._list_request(course_id, work_id, page_token).execute(http=http)
                except (HttpError, RefreshError) as exc:
                    raise SourceUnavailable(
                        "list_student_submissions",
                        course_id=course_id,
                        course_work_id=work_id,
                        reason=str(exc),
                    ) from exc
                found[work_id].extend(response.get("studentSubmissions", []))
                page_token = response.get("nextPageToken")

        logger.debug(
            "course_id=%s requested=%d returned=%d", course_id, len(ids), len(found)
        )
        return found
