# shift/service.py
from __future__ import annotations
from typing import Optional

import structlog
from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from core.errors import NotFound, Conflict, ValidationFailed
from swaprequest.models import SwapRequest
from .models import Shift
from .schemas import ShiftCreate
from .timewindow import validate_date_range, validate_time_slot, valid_duration

log = structlog.get_logger(__name__)


def get_shift(db: Session, shift_id: int) -> Shift | None:
    return db.get(Shift, shift_id)


def get_shift_for_user(db: Session, shift_id: int, user_id: int) -> Optional[Shift]:
    stmt = select(Shift).where(Shift.id == shift_id, Shift.user_id == user_id)
    return db.scalars(stmt).first()


def _active_request_exists(shift_id):
    return exists().where(SwapRequest.have_shift_id == shift_id, SwapRequest.is_active.is_(True))


def get_user_shifts(db: Session, user_id: int) -> list[dict]:
    """Caller's shifts ordered by date, each flagged with has_active_swap_request."""
    stmt = (
        select(Shift, _active_request_exists(Shift.id).label("has_active"))
        .where(Shift.user_id == user_id)
        .order_by(Shift.date, Shift.start, Shift.id)
    )
    rows = []
    for shift, has_active in db.execute(stmt):
        rows.append({
            "id": shift.id,
            "user_id": shift.user_id,
            "date": shift.date,
            "start": shift.start,
            "end": shift.end,
            "duration_hours": shift.duration_hours,
            "has_active_swap_request": bool(has_active),
        })
    return rows


def create_shift(db: Session, shift: ShiftCreate) -> Shift:
    # payload validators already ran; guard direct service callers too
    err = validate_date_range(shift.date) or validate_time_slot(shift.start, shift.end)
    if err:
        raise ValidationFailed(err)
    if not valid_duration(shift.duration_hours):
        raise ValidationFailed("Duration is not one of the permitted values")

    row = Shift(
        user_id=shift.user_id,
        date=shift.date,
        start=shift.start,
        end=shift.end,
        duration_hours=shift.duration_hours,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    log.info("shift_created", shift_id=row.id, user_id=row.user_id, date=row.date)
    return row


def delete_shift(db: Session, shift_id: int, user_id: int) -> None:
    row = get_shift_for_user(db, shift_id, user_id)
    if not row:
        raise NotFound("Shift not found")
    if db.scalar(select(_active_request_exists(row.id))):
        raise Conflict("Cannot delete shift with active swap requests. Please delete the swap request first.")
    db.delete(row)
    db.commit()
    log.info("shift_deleted", shift_id=shift_id, user_id=user_id)
