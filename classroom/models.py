"""
Data models for Classroom coursework, submissions and attachments.

Only the fields the assignment pipeline reads are kept; every field coming
from the API is optional and parsed leniently.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def _opt_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Course:
    id: str
    name: str

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Course":
        return cls(
            id=str(payload.get("id", "")),
            name=str(payload.get("name") or ""),
        )


@dataclass
class DueDate:
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any] | None) -> Optional["DueDate"]:
        if payload is None:
            return None
        return cls(
            year=_opt_int(payload.get("year")),
            month=_opt_int(payload.get("month")),
            day=_opt_int(payload.get("day")),
        )


@dataclass
class DueTime:
    hours: Optional[int] = None
    minutes: Optional[int] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any] | None) -> Optional["DueTime"]:
        # The API omits zero-valued fields; an omitted field stays None.
        if payload is None:
            return None
        return cls(
            hours=_opt_int(payload.get("hours")),
            minutes=_opt_int(payload.get("minutes")),
        )


@dataclass
class CourseWork:
    id: str
    course_id: str
    title: str = ""
    description: str = ""
    due_date: Optional[DueDate] = None
    due_time: Optional[DueTime] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "CourseWork":
        return cls(
            id=str(payload.get("id", "")),
            course_id=str(payload.get("courseId", "")),
            title=str(payload.get("title") or ""),
            description=str(payload.get("description") or ""),
            due_date=DueDate.from_api(payload.get("dueDate")),
            due_time=DueTime.from_api(payload.get("dueTime")),
        )


@dataclass
class DriveFile:
    id: str = ""
    title: str = ""
    alternate_link: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "DriveFile":
        return cls(
            id=str(payload.get("id") or ""),
            title=str(payload.get("title") or ""),
            alternate_link=payload.get("alternateLink"),
        )


@dataclass
class Attachment:
    drive_file: Optional[DriveFile] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Attachment":
        drive_file = payload.get("driveFile")
        return cls(drive_file=DriveFile.from_api(drive_file) if drive_file else None)


@dataclass
class StudentSubmission:
    id: str
    course_work_id: str
    state: str = ""
    attachments: list[Attachment] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "StudentSubmission":
        assignment = payload.get("assignmentSubmission") or {}
        return cls(
            id=str(payload.get("id", "")),
            course_work_id=str(payload.get("courseWorkId", "")),
            state=str(payload.get("state") or ""),
            attachments=[Attachment.from_api(item) for item in assignment.get("attachments") or []],
        )


@dataclass
class WorkItem:
    course_name: str
    work: CourseWork


@dataclass
class CourseGroup:
    course_id: str
    items: list[WorkItem] = field(default_factory=list)

    @property
    def course_work_ids(self) -> list[str]:
        return [item.work.id for item in self.items]
