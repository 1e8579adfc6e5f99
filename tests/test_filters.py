from datetime import datetime

import pytest

from assignments.filters import (
    PARTIAL_DUE_LABEL,
    DueStatus,
    due_status,
    format_due,
    has_document,
    has_due_date,
    is_active,
    is_displayable,
    is_document_link,
    is_eligible,
    is_past_due,
)
from classroom.models import Attachment, DueDate, DueTime
from tests.fakes import make_submission, make_work

NOW = datetime(2026, 10, 19, 12, 0)


def test_future_due_date_is_eligible_and_not_overdue() -> None:
    work = make_work("w1", date=(2099, 1, 1), time=(0, 0))

    assert has_due_date(work)
    assert not is_past_due(work, NOW)
    assert is_eligible(work, NOW)
    assert due_status(work, NOW) is DueStatus.NOT_OVERDUE


def test_past_due_date_is_excluded() -> None:
    work = make_work("w1", date=(2000, 1, 1), time=(0, 0))

    assert is_past_due(work, NOW)
    assert not is_eligible(work, NOW)
    assert due_status(work, NOW) is DueStatus.OVERDUE


def test_due_exactly_now_counts_as_overdue() -> None:
    work = make_work("w1", date=(2026, 10, 19), time=(12, 0))

    assert is_past_due(work, NOW)


def test_partial_due_time_is_kept_with_fallback_label() -> None:
    work = make_work("w1", date=(2000, 1, 1), time=(None, 9))

    assert due_status(work, NOW) is DueStatus.INDETERMINATE
    assert not is_past_due(work, NOW)
    assert is_eligible(work, NOW)
    assert format_due(work) == PARTIAL_DUE_LABEL


def test_year_only_due_date_is_still_eligible() -> None:
    work = make_work("w1", date=(2000, None, None), time=(None, None))

    assert is_eligible(work, NOW)


@pytest.mark.parametrize(
    "date, time",
    [(None, (0, 0)), ((2099, 1, 1), None), (None, None)],
)
def test_missing_due_objects_are_not_eligible(date, time) -> None:
    work = make_work("w1", date=date, time=time)

    assert not has_due_date(work)
    assert not is_eligible(work, NOW)


def test_impossible_calendar_date_is_indeterminate() -> None:
    work = make_work("w1", date=(2000, 2, 30), time=(10, 0))

    assert due_status(work, NOW) is DueStatus.INDETERMINATE
    assert is_eligible(work, NOW)


def test_format_due_pads_minutes() -> None:
    work = make_work("w1", date=(2099, 3, 7), time=(9, 5))

    assert format_due(work) == "Due: 3-7-2099 9:05"


def test_empty_due_objects_are_present_but_indeterminate() -> None:
    work = make_work("w1")
    work.due_date = DueDate()
    work.due_time = DueTime()

    assert has_due_date(work)
    assert due_status(work, NOW) is DueStatus.INDETERMINATE


@pytest.mark.parametrize(
    "state, expected",
    [("NEW", True), ("CREATED", True), ("TURNED_IN", False), ("RETURNED", False), ("", False), ("SOMETHING_NEW", False)],
)
def test_is_active_only_for_new_and_created(state, expected) -> None:
    assert is_active(make_submission("w1", state=state)) is expected


def test_document_link_detection() -> None:
    assert is_document_link("https://docs.google.com/document/d/XYZ")
    assert is_document_link("HTTPS://DOCS.GOOGLE.COM/Document/d/XYZ")
    assert not is_document_link("https://docs.google.com/spreadsheets/d/XYZ")
    assert not is_document_link(None)


def test_has_document_checks_any_attachment() -> None:
    doc = make_submission("w1", links=["https://docs.google.com/document/d/XYZ"])
    sheet = make_submission("w1", links=["https://docs.google.com/spreadsheets/d/XYZ"])
    mixed = make_submission("w1", links=[None, "https://docs.google.com/document/d/ABC"])
    bare = make_submission("w1")
    bare.attachments.append(Attachment(drive_file=None))

    assert has_document(doc)
    assert not has_document(sheet)
    assert has_document(mixed)
    assert not has_document(bare)


def test_displayable_needs_active_state_and_document() -> None:
    link = ["https://docs.google.com/document/d/XYZ"]

    assert is_displayable(make_submission("w1", state="NEW", links=link))
    assert not is_displayable(make_submission("w1", state="TURNED_IN", links=link))
    assert not is_displayable(make_submission("w1", state="NEW"))
