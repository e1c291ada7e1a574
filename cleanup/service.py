"""Expiry sweeper: retire requests and interests on past shifts, then purge the shifts.

Runs opportunistically from read endpoints (at most once per
``CLEANUP_INTERVAL_HOURS`` per process) and unconditionally from the admin
cleanup endpoint. A duplicate run is harmless: every step only touches rows
that are still active or still present.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import structlog
from sqlalchemy import select, update, delete, or_
from sqlalchemy.orm import Session

from core.config_loader import settings
from interest.models import Interest
from shift.models import Shift
from shift.timewindow import today_local
from swaprequest.models import SwapRequest

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SweepResult:
    shifts_deleted: int = 0
    requests_deactivated: int = 0
    interests_deactivated: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpirySweeper:
    def __init__(
        self,
        interval: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.interval = interval if interval is not None else timedelta(hours=settings.CLEANUP_INTERVAL_HOURS)
        self.clock = clock
        self.last_run_at: Optional[datetime] = None

    def sweep(self, db: Session, reference_date: str) -> SweepResult:
        """Expire everything dated strictly before ``reference_date`` (YYYY-MM-DD)."""
        expired_shift_ids = select(Shift.id).where(Shift.date < reference_date)
        expired_request_ids = select(SwapRequest.id).where(SwapRequest.have_shift_id.in_(expired_shift_ids))

        try:
            requests = db.execute(
                update(SwapRequest)
                .where(SwapRequest.is_active.is_(True), SwapRequest.have_shift_id.in_(expired_shift_ids))
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            interests = db.execute(
                update(Interest)
                .where(
                    Interest.is_active.is_(True),
                    or_(
                        Interest.swap_request_id.in_(expired_request_ids),
                        Interest.offered_shift_id.in_(expired_shift_ids),
                    ),
                )
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            # dependents are already inactive; the FK cascade removes them with the shift
            shifts = db.execute(
                delete(Shift)
                .where(Shift.date < reference_date)
                .execution_options(synchronize_session=False)
            )
            db.commit()
        except Exception:
            db.rollback()
            log.exception("sweep_failed", reference_date=reference_date)
            raise
        db.expire_all()

        result = SweepResult(
            shifts_deleted=shifts.rowcount,
            requests_deactivated=requests.rowcount,
            interests_deactivated=interests.rowcount,
        )
        log.info("sweep_completed", reference_date=reference_date, **result.as_dict())
        return result

    def run_now(self, db: Session) -> SweepResult:
        now = self.clock()
        result = self.sweep(db, today_local(now).isoformat())
        self.last_run_at = now
        return result

    def is_due(self, now: Optional[datetime] = None) -> bool:
        now = now or self.clock()
        return self.last_run_at is None or now - self.last_run_at >= self.interval

    def run_if_due(self, db: Session) -> Optional[SweepResult]:
        if not self.is_due():
            return None
        return self.run_now(db)


# process-wide instance; last_run_at resets on restart
sweeper = ExpirySweeper()
