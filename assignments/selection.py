from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from assignments.errors import DocumentError, DocumentFetchFailure, InvalidSelection
from assignments.sources import DocumentHandle, DocumentResolver
from classroom.models import StudentSubmission, WorkItem

logger = logging.getLogger("assignments.selection")

Assistant = Callable[[str, str], Awaitable[str]]


def parse_selection(raw: object, low: int, high: int) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise InvalidSelection(raw, low, high) from exc
    if not low <= value <= high:
        raise InvalidSelection(value, low, high)
    return value


def prompt_for_number(
    prompt: str,
    low: int,
    high: int,
    input_fn: Callable[[str], str] = input,
    emit: Callable[[str], None] = print,
) -> int:
    """Ask until the answer is a whole number in [low, high]."""
    while True:
        raw = input_fn(f"{prompt} ({low}-{high}): ")
        try:
            return parse_selection(raw, low, high)
        except InvalidSelection as exc:
            logger.debug("Rejected selection: %s", exc)
            emit(f"Please enter a number between {low} and {high}.")


def _label(handle: DocumentHandle) -> str:
    return handle.title or handle.document_id


async def _extract(resolver: DocumentResolver, handle: DocumentHandle) -> str:
    if handle.error:
        raise DocumentFetchFailure(handle.document_id, handle.error)
    return await resolver.extract_content(handle)


async def resolve_selection(
    item: WorkItem,
    submissions: list[StudentSubmission],
    resolver: DocumentResolver,
    emit: Callable[[str], None] = print,
    assistant: Optional[Assistant] = None,
) -> None:
    """
    Print the chosen coursework's description followed by the text of every
    Google Doc attached to its submissions, in the order the resolver
    returned them. A document that cannot be read gets a notice instead.
    """
    fetch_error: Optional[DocumentError] = None
    try:
        handles = await resolver.fetch_documents(submissions)
    except DocumentError as exc:
        logger.warning("Document lookup failed for course_work_id=%s: %s", item.work.id, exc)
        handles, fetch_error = [], exc

    emit(item.work.description)

    if fetch_error is not None:
        emit(f"[Could not load documents: {fetch_error}]")
        return
    if not handles:
        logger.info("No documents attached for course_work_id=%s", item.work.id)
        return

    outcomes = await asyncio.gather(
        *(_extract(resolver, handle) for handle in handles),
        return_exceptions=True,
    )

    for handle, outcome in zip(handles, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, DocumentError):
                logger.warning("Skipping %s", outcome)
            else:
                logger.error("Unexpected failure reading document %s", handle.document_id, exc_info=outcome)
            notice = f"[Could not read document {_label(handle)}: {outcome}]"
            if handle.link:
                notice = f"{notice} {handle.link}"
            emit(notice)
            continue

        emit(outcome)
        if assistant is None:
            continue
        try:
            emit(await assistant(outcome, item.work.description))
        except Exception as exc:
            logger.warning("Assistant failed for document %s: %s", handle.document_id, exc)
            emit(f"[AI assistant unavailable: {exc}]")
