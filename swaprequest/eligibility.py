"""Decide whether an offered shift satisfies a swap request.

The same function backs server-side validation of an interest and the
pre-filter that lists which of a worker's shifts they may offer, so the
two can never disagree.

Rules run in order and stop at the first failure:

1. duration must equal the requested shift's duration;
2. the date must match the want (same day, or one of the listed dates);
3. the start/end must satisfy the time rule.

Checking that the candidate belongs to someone other than the requester is
the caller's job.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .rules import SameDay, DateList, AnyTime, ExactStart, EndNotAfter


class Ineligible(str, Enum):
    DURATION_MISMATCH = "duration mismatch"
    DATE_MISMATCH = "date mismatch"
    START_TIME_MISMATCH = "start time mismatch"
    END_TIME_TOO_LATE = "end time too late"


MESSAGES = {
    Ineligible.DURATION_MISMATCH: "Offered shift duration must match requested shift duration",
    Ineligible.DATE_MISMATCH: "Offered shift date does not match the requested date(s)",
    Ineligible.START_TIME_MISMATCH: "Offered shift start time must match the exact start time requirement",
    Ineligible.END_TIME_TOO_LATE: "Offered shift end time must not be after the specified time",
}


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    reason: Optional[Ineligible] = None

    @property
    def message(self) -> Optional[str]:
        return MESSAGES[self.reason] if self.reason else None


ELIGIBLE = Eligibility(True)


def _date_matches(want, have_date: str, candidate_date: str) -> bool:
    if isinstance(want, SameDay):
        return candidate_date == have_date
    if isinstance(want, DateList):
        return candidate_date in want.dates
    raise TypeError(f"unknown want variant: {want!r}")


def _time_rule_fails(rule, candidate) -> Optional[Ineligible]:
    if isinstance(rule, AnyTime):
        return None
    if isinstance(rule, ExactStart):
        return None if candidate.start == rule.time else Ineligible.START_TIME_MISMATCH
    if isinstance(rule, EndNotAfter):
        # zero-padded HH:MM compares correctly as strings
        return None if candidate.end <= rule.time else Ineligible.END_TIME_TOO_LATE
    raise TypeError(f"unknown time rule variant: {rule!r}")


def is_eligible(request, candidate) -> Eligibility:
    """Check ``candidate`` (a Shift) against ``request`` (a SwapRequest)."""
    have = request.have_shift

    if candidate.duration_hours != have.duration_hours:
        return Eligibility(False, Ineligible.DURATION_MISMATCH)

    if not _date_matches(request.want, have.date, candidate.date):
        return Eligibility(False, Ineligible.DATE_MISMATCH)

    failed = _time_rule_fails(request.time_constraint, candidate)
    if failed:
        return Eligibility(False, failed)

    return ELIGIBLE
