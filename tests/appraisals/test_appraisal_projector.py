from __future__ import annotations

from datetime import datetime

import pytest

from src.staff_hub.staff_hub.appraisals.model import AppraisalRecord
from src.staff_hub.staff_hub.appraisals.projector import classify, last_completed, project
from src.staff_hub.staff_hub.common.datetime_utils import date_to_timestamp
from src.staff_hub.staff_hub.core.enums import AppraisalStatus, AppraisalType


def record(record_id: str, day: str, *, complete: bool = True) -> AppraisalRecord:
    return AppraisalRecord(
        id=record_id,
        employee_id="E1",
        scheduled_date=date_to_timestamp(day),
        appraisal_type=AppraisalType.ANNUAL,
        notes="",
        is_complete=complete,
    )


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 4, 20), AppraisalStatus.OVERDUE),
        (datetime(2024, 4, 5), AppraisalStatus.DUE_SOON),
        (datetime(2024, 2, 1), AppraisalStatus.UP_TO_DATE),
    ],
)
def test_next_appraisal_is_due_three_months_after_the_last(now, expected):
    projection = project([record("a1", "2024-01-15")], now)

    assert projection.next_due == datetime(2024, 4, 15)
    assert projection.status == expected


def test_no_completed_appraisal_means_no_history():
    projection = project([record("a1", "2024-01-15", complete=False)], datetime(2024, 4, 20))

    assert projection.last_appraisal is None
    assert projection.next_due is None
    assert projection.status == AppraisalStatus.NO_HISTORY


def test_latest_completed_record_wins_regardless_of_order():
    records = [record("old", "2023-06-01"), record("new", "2024-01-15"), record("planned", "2024-03-01", complete=False)]

    assert last_completed(records).id == "new"
    assert last_completed(reversed(records)).id == "new"


def test_classification_boundaries():
    due = datetime(2024, 4, 15)

    assert classify(due, due) == AppraisalStatus.DUE_SOON
    assert classify(due, datetime(2024, 4, 1, 0, 0, 1)) == AppraisalStatus.DUE_SOON
    assert classify(due, datetime(2024, 4, 1)) == AppraisalStatus.UP_TO_DATE
    assert classify(due, datetime(2024, 4, 15, 0, 0, 1)) == AppraisalStatus.OVERDUE
    assert classify(None, due) == AppraisalStatus.NO_HISTORY


def test_month_end_is_clamped():
    assert project([record("a1", "2023-11-30")], datetime(2024, 1, 1)).next_due == datetime(2024, 2, 29)
