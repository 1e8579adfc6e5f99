from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional

from assignments.filters import is_eligible
from classroom.models import CourseGroup, CourseWork, WorkItem

logger = logging.getLogger("assignments.grouping")


def group_by_course(
    courses: Mapping[str, list[CourseWork]],
    now: Optional[datetime] = None,
) -> list[CourseGroup]:
    """
    Group eligible coursework by owning course id.

    Groups come out in the order their first item was seen and items keep
    their scan order. A course with nothing eligible gets no group.
    """
    now = now or datetime.now()
    groups: dict[str, CourseGroup] = {}

    for course_name, works in courses.items():
        for work in works:
            if not is_eligible(work, now):
                continue
            group = groups.get(work.course_id)
            if group is None:
                group = CourseGroup(course_id=work.course_id)
                groups[work.course_id] = group
            group.items.append(WorkItem(course_name=course_name, work=work))

    logger.debug(
        "Grouped %d eligible item(s) into %d course group(s)",
        sum(len(group.items) for group in groups.values()),
        len(groups),
    )
    return list(groups.values())


def flatten(groups: list[CourseGroup]) -> list[WorkItem]:
    return [item for group in groups for item in group.items]
