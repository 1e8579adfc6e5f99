"""
Due-date and submission predicates.

Eligibility only needs the due-date and due-time objects to exist, while the
overdue check needs all five fields. A partially specified due date is kept
and shown with a fallback label; it is never dropped as overdue.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from classroom.models import CourseWork, StudentSubmission

ACTIVE_STATES = frozenset({"NEW", "CREATED"})
DOCUMENT_MARKER = "docs.google.com/document"
PARTIAL_DUE_LABEL = "Due date not fully specified"


class DueStatus(Enum):
    OVERDUE = "overdue"
    NOT_OVERDUE = "not_overdue"
    INDETERMINATE = "indeterminate"


def due_datetime(work: CourseWork) -> Optional[datetime]:
    date, time = work.due_date, work.due_time
    if date is None or time is None:
        return None
    fields = (date.year, date.month, date.day, time.hours, time.minutes)
    if any(value is None for value in fields):
        return None
    try:
        return datetime(date.year, date.month, date.day, time.hours, time.minutes)
    except ValueError:
        return None


def due_status(work: CourseWork, now: Optional[datetime] = None) -> DueStatus:
    due = due_datetime(work)
    if due is None:
        return DueStatus.INDETERMINATE
    now = now or datetime.now()
    return DueStatus.OVERDUE if due <= now else DueStatus.NOT_OVERDUE


def has_due_date(work: CourseWork) -> bool:
    return work.due_date is not None and work.due_time is not None


def is_past_due(work: CourseWork, now: Optional[datetime] = None) -> bool:
    return due_status(work, now) is DueStatus.OVERDUE


def is_eligible(work: CourseWork, now: Optional[datetime] = None) -> bool:
    return has_due_date(work) and not is_past_due(work, now)


def format_due(work: CourseWork) -> str:
    due = due_datetime(work)
    if due is None:
        return PARTIAL_DUE_LABEL
    return f"Due: {due.month}-{due.day}-{due.year} {due.hour}:{due.minute:02d}"


# ── Submissions ───────────────────────────────────────────

def is_active(submission: StudentSubmission) -> bool:
    return submission.state in ACTIVE_STATES


def is_document_link(link: Optional[str]) -> bool:
    return link is not None and DOCUMENT_MARKER in link.lower()


def has_document(submission: StudentSubmission) -> bool:
    return any(
        attachment.drive_file is not None
        and is_document_link(attachment.drive_file.alternate_link)
        for attachment in submission.attachments
    )


def is_displayable(submission: StudentSubmission) -> bool:
    return is_active(submission) and has_document(submission)
