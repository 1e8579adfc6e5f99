from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from assignments.batching import SubmissionsByCourse, submissions_for
from assignments.errors import InvalidSelection
from assignments.filters import format_due, is_displayable
from classroom.models import WorkItem

logger = logging.getLogger("assignments.indexer")


@dataclass
class SelectionIndex:
    # entries[n - 1] is the position in the flattened item list shown as n.
    entries: list[int] = field(default_factory=list)

    @property
    def last_number(self) -> int:
        return len(self.entries)

    def assign(self, item_index: int) -> int:
        self.entries.append(item_index)
        return len(self.entries)

    def resolve(self, number: int) -> int:
        if not 1 <= number <= self.last_number:
            raise InvalidSelection(number, 1, self.last_number)
        return self.entries[number - 1]


def build_index(
    items: list[WorkItem],
    submissions: SubmissionsByCourse,
    emit: Callable[[str], None] = print,
) -> SelectionIndex:
    """
    Number every item that has at least one active submission with a Google
    Doc attached and print it with the state of each such submission.
    Numbers start at 1 and have no gaps.
    """
    index = SelectionIndex()

    for position, item in enumerate(items):
        qualifying = [s for s in submissions_for(submissions, item) if is_displayable(s)]
        if not qualifying:
            continue

        number = index.assign(position)
        emit(f"{number}. Course: {item.course_name}")
        emit(f"  - {item.work.title} ({format_due(item.work)})")
        for submission in qualifying:
            emit(f"    - {submission.state}")

    logger.debug("Indexed %d of %d item(s)", index.last_number, len(items))
    return index
