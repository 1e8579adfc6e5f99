"""
assignments/pipeline.py

End-to-end run: list coursework, keep what is still due, fetch submissions
one batch per course, number the coursework that has an active Google Doc
submission, ask which one to open, then print its description and documents.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

import config
from assignments.batching import BatchSubmissionCoordinator, submissions_for
from assignments.grouping import flatten, group_by_course
from assignments.indexer import build_index
from assignments.selection import Assistant, prompt_for_number, resolve_selection
from assignments.sources import CourseWorkSource, DocumentResolver, SubmissionSource

logger = logging.getLogger("assignments.pipeline")

SELECTION_PROMPT = "Which assignment would you like to open?"


async def run_pipeline(
    coursework_source: CourseWorkSource,
    submission_source: SubmissionSource,
    resolver: DocumentResolver,
    *,
    input_fn: Callable[[str], str] = input,
    emit: Callable[[str], None] = print,
    now: Optional[datetime] = None,
    max_concurrency: int = config.MAX_CONCURRENT_BATCHES,
    assistant: Optional[Assistant] = None,
) -> None:
    now = now or datetime.now()

    courses = await coursework_source.fetch_all()
    logger.info("Loaded coursework for %d course(s)", len(courses))

    groups = group_by_course(courses, now)
    if not groups:
        logger.info("No upcoming coursework with a due date")
        emit("No upcoming assignments found.")
        return

    coordinator = BatchSubmissionCoordinator(submission_source, max_concurrency=max_concurrency)
    submissions = await coordinator.fetch(groups)

    items = flatten(groups)
    index = build_index(items, submissions, emit=emit)
    if index.last_number == 0:
        logger.info("No active submissions with a Google Doc attached")
        emit("No assignments with an open Google Doc submission.")
        return

    # Stays on the loop thread so Ctrl+C at the prompt reaches the caller.
    number = prompt_for_number(SELECTION_PROMPT, 1, index.last_number, input_fn, emit)
    item = items[index.resolve(number)]
    logger.info("Selected %d -> course_id=%s course_work_id=%s", number, item.work.course_id, item.work.id)

    await resolve_selection(
        item,
        submissions_for(submissions, item),
        resolver,
        emit=emit,
        assistant=assistant,
    )
