"""Next-appraisal projection.

An employee is due an appraisal a fixed number of calendar months after the
most recent completed one. The status is a pure function of the last
completed appraisal and the observation instant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import add_months, ns_to_datetime
from ..core.constants import APPRAISAL_DUE_SOON_DAYS, APPRAISAL_INTERVAL_MONTHS
from ..core.enums import AppraisalStatus
from .model import AppraisalRecord


@dataclass(frozen=True)
class AppraisalProjection:
    last_appraisal: Optional[AppraisalRecord]
    next_due: Optional[datetime]
    status: AppraisalStatus


def last_completed(records: Iterable[AppraisalRecord]) -> Optional[AppraisalRecord]:
    completed = [r for r in records if r.is_complete]
    if not completed:
        return None
    return max(completed, key=lambda r: r.scheduled_date)


def next_due_date(last_appraisal: AppraisalRecord) -> datetime:
    return add_months(ns_to_datetime(last_appraisal.scheduled_date), APPRAISAL_INTERVAL_MONTHS)


def classify(next_due: Optional[datetime], now: datetime) -> AppraisalStatus:
    if next_due is None:
        return AppraisalStatus.NO_HISTORY
    if next_due < now:
        return AppraisalStatus.OVERDUE
    if next_due - now < timedelta(days=APPRAISAL_DUE_SOON_DAYS):
        return AppraisalStatus.DUE_SOON
    return AppraisalStatus.UP_TO_DATE


def project(records: Iterable[AppraisalRecord], now: datetime) -> AppraisalProjection:
    last = last_completed(records)
    next_due = next_due_date(last) if last else None
    return AppraisalProjection(last_appraisal=last, next_due=next_due, status=classify(next_due, now))
