from __future__ import annotations

from typing import Optional


class AssistantError(Exception):
    """Base class for errors raised by the assignment pipeline."""


class SourceUnavailable(AssistantError):
    """A Classroom source failed (auth or transport). Not retried."""

    def __init__(
        self,
        operation: str,
        *,
        course_id: Optional[str] = None,
        course_work_id: Optional[str] = None,
        reason: str = "",
    ) -> None:
        self.operation = operation
        self.course_id = course_id
        self.course_work_id = course_work_id
        self.reason = reason

        parts = [f"{operation} failed"]
        if course_id:
            parts.append(f"course_id={course_id}")
        if course_work_id:
            parts.append(f"course_work_id={course_work_id}")
        message = " ".join(parts)
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidSelection(AssistantError, ValueError):
    def __init__(self, value: object, low: int, high: int) -> None:
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"Selection {value!r} is not a number between {low} and {high}")


class DocumentError(AssistantError):
    def __init__(self, document_id: str, reason: str = "") -> None:
        self.document_id = document_id
        self.reason = reason
        message = f"document {document_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DocumentFetchFailure(DocumentError):
    pass


class ContentExtractionFailure(DocumentError):
    pass
