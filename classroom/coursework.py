from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

import config
from assignments.errors import SourceUnavailable
from classroom.models import Course, CourseWork

logger = logging.getLogger("classroom.coursework")


def get_all_courses(service, course_states: list[str] | None = None) -> list[dict[str, Any]]:
    courses = []
    page_token = None
    while True:
        response = service.courses().list(
            courseStates=course_states or None, pageToken=page_token, pageSize=100
        ).execute()
        courses.extend(response.get("courses", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            break
    return courses


def get_all_coursework(service, course_id: str) -> list[dict[str, Any]]:
    coursework = []
    page_token = None
    while True:
        response = service.courses().courseWork().list(
            courseId=course_id, pageToken=page_token, pageSize=100
        ).execute()
        coursework.extend(response.get("courseWork", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            break
    return coursework


class ClassroomCourseWorkSource:
    """Course name -> coursework for every course the user can see."""

    def __init__(self, service, course_states: list[str] | None = None):
        self.service = service
        self.course_states = course_states if course_states is not None else config.COURSE_STATES

    async def fetch_all(self) -> dict[str, list[CourseWork]]:
        try:
            raw_courses = await asyncio.to_thread(get_all_courses, self.service, self.course_states)
        except (HttpError, RefreshError) as exc:
            raise SourceUnavailable("list_courses", reason=str(exc)) from exc

        courses = [Course.from_api(item) for item in raw_courses]
        logger.info("Found %d course(s)", len(courses))

        result: dict[str, list[CourseWork]] = {}
        for course in courses:
            try:
                raw_work = await asyncio.to_thread(get_all_coursework, self.service, course.id)
            except (HttpError, RefreshError) as exc:
                raise SourceUnavailable("list_coursework", course_id=course.id, reason=str(exc)) from exc

            works = []
            for payload in raw_work:
                work = CourseWork.from_api(payload)
                if not work.course_id:
                    work.course_id = course.id
                works.append(work)

            logger.debug("course_id=%s name=%s coursework=%d", course.id, course.name, len(works))
            # Same-named courses share a key; grouping later splits them by id.
            result.setdefault(course.name, []).extend(works)

        return result
