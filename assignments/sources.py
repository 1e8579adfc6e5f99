"""
Contracts the pipeline needs from the outside world.

The Google-backed implementations live in ``classroom`` and ``documents``;
tests use in-memory fakes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from classroom.models import CourseWork, StudentSubmission


@dataclass
class DocumentHandle:
    document_id: str
    title: str = ""
    link: Optional[str] = None
    body: Optional[dict] = None
    error: Optional[str] = None


class CourseWorkSource(Protocol):
    async def fetch_all(self) -> dict[str, list[CourseWork]]:
        ...


class SubmissionSource(Protocol):
    async def fetch_batch(
        self, course_id: str, course_work_ids: list[str]
    ) -> dict[str, list[StudentSubmission]]:
        ...


class DocumentResolver(Protocol):
    async def fetch_documents(self, submissions: list[StudentSubmission]) -> list[DocumentHandle]:
        ...

    async def extract_content(self, handle: DocumentHandle) -> str:
        ...
