from __future__ import annotations

import asyncio
import logging

from assignments.errors import SourceUnavailable
from assignments.sources import SubmissionSource
from classroom.models import CourseGroup, StudentSubmission, WorkItem

logger = logging.getLogger("assignments.batching")

SubmissionsByCourse = dict[str, dict[str, list[StudentSubmission]]]


class BatchSubmissionCoordinator:
    """
    Fetches submissions with one batched request per course group.

    Groups run concurrently; each writes only its own course-id slot. A failed
    group never cancels the others, but the first failure is raised once every
    group has finished.
    """

    def __init__(self, source: SubmissionSource, max_concurrency: int = 4):
        self.source = source
        self.max_concurrency = max(1, max_concurrency)

    async def fetch(self, groups: list[CourseGroup]) -> SubmissionsByCourse:
        semaphore = asyncio.Semaphore(self.max_concurrency)
        results: SubmissionsByCourse = {}

        async def _fetch_group(group: CourseGroup) -> None:
            async with semaphore:
                ids = group.course_work_ids
                logger.debug("Fetching submissions course_id=%s ids=%d", group.course_id, len(ids))
                results[group.course_id] = await self.source.fetch_batch(group.course_id, ids)

        outcomes = await asyncio.gather(
            *(_fetch_group(group) for group in groups),
            return_exceptions=True,
        )

        failures = []
        for group, outcome in zip(groups, outcomes):
            if not isinstance(outcome, BaseException):
                continue
            logger.error("Submission batch failed for course_id=%s: %s", group.course_id, outcome)
            failures.append((group, outcome))

        if failures:
            group, exc = failures[0]
            if isinstance(exc, SourceUnavailable):
                raise exc
            if not isinstance(exc, Exception):
                raise exc
            raise SourceUnavailable(
                "fetch_submission_batch",
                course_id=group.course_id,
                reason=str(exc),
            ) from exc

        logger.info("Fetched submissions for %d course group(s)", len(results))
        return results


def submissions_for(results: SubmissionsByCourse, item: WorkItem) -> list[StudentSubmission]:
    by_work = results.get(item.work.course_id, {})
    submissions = by_work.get(item.work.id)
    if submissions is None:
        logger.info(
            "No submissions returned for course_id=%s course_work_id=%s",
            item.work.course_id,
            item.work.id,
        )
        return []
    return submissions
