# swaprequest/service.py
from __future__ import annotations
from typing import Optional

import structlog
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session, joinedload

from core.database import commit_or_conflict
from core.errors import NotFound, Conflict, Forbidden, ValidationFailed
from interest.models import Interest
from shift.models import Shift
from shift.timewindow import validate_date_range, is_valid_time
from .eligibility import is_eligible
from .models import SwapRequest
from .rules import DateList, AnyTime
from .schemas import SwapRequestCreate

log = structlog.get_logger(__name__)

DUPLICATE_REQUEST = "You already have an active swap request for this shift"


def get_active_request(db: Session, request_id: int) -> Optional[SwapRequest]:
    stmt = (
        select(SwapRequest)
        .options(joinedload(SwapRequest.have_shift))
        .where(SwapRequest.id == request_id, SwapRequest.is_active.is_(True))
    )
    return db.scalars(stmt).first()


def get_active_request_for_shift(db: Session, shift_id: int) -> Optional[SwapRequest]:
    stmt = select(SwapRequest).where(
        SwapRequest.have_shift_id == shift_id, SwapRequest.is_active.is_(True)
    )
    return db.scalars(stmt).first()


def _validate(dto: SwapRequestCreate) -> None:
    if isinstance(dto.want, DateList):
        if not dto.want.dates:
            raise ValidationFailed("Want dates are required when want type is DATE_LIST")
        for d in dto.want.dates:
            err = validate_date_range(d)
            if err:
                raise ValidationFailed(f"{d}: {err}")
    if not isinstance(dto.time_rule, AnyTime) and not is_valid_time(dto.time_rule.time):
        raise ValidationFailed("Time value must be in HH:MM format")
    if dto.note is not None and len(dto.note) > 500:
        raise ValidationFailed("Note must be at most 500 characters")


def create_request(db: Session, dto: SwapRequestCreate) -> SwapRequest:
    _validate(dto)

    shift = db.get(Shift, dto.have_shift_id)
    if not shift or shift.user_id != dto.requester_user_id:
        raise NotFound("Shift not found or not owned by user")

    if get_active_request_for_shift(db, shift.id):
        raise Conflict(DUPLICATE_REQUEST)

    row = SwapRequest(
        requester_user_id=dto.requester_user_id,
        have_shift_id=shift.id,
        note=dto.note,
        is_active=True,
    )
    row.want = dto.want
    row.time_constraint = dto.time_rule
    db.add(row)
    # the partial unique index catches a concurrent creator
    commit_or_conflict(db, DUPLICATE_REQUEST)
    db.refresh(row)
    log.info("swap_request_created", swap_request_id=row.id, shift_id=shift.id,
             want_type=row.want_type.value, time_rule=row.time_rule.value)
    return row


def delete_request(db: Session, request_id: int, owner_id: int) -> None:
    """Soft-delete a request and every interest on it in one transaction."""
    row = db.scalars(
        select(SwapRequest).where(
            SwapRequest.id == request_id,
            SwapRequest.requester_user_id == owner_id,
            SwapRequest.is_active.is_(True),
        )
    ).first()
    if not row:
        raise NotFound("Swap request not found or not owned by user")

    row.is_active = False
    result = db.execute(
        update(Interest)
        .where(Interest.swap_request_id == request_id, Interest.is_active.is_(True))
        .values(is_active=False)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    log.info("swap_request_deleted", swap_request_id=request_id, interests_deactivated=result.rowcount)


def list_browsable_requests(db: Session, user_id: int) -> list[dict]:
    stmt = (
        select(SwapRequest)
        .options(joinedload(SwapRequest.requester), joinedload(SwapRequest.have_shift))
        .where(SwapRequest.is_active.is_(True), SwapRequest.requester_user_id != user_id)
        .order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
    )
    requests = list(db.scalars(stmt).unique())
    ids = [r.id for r in requests]
    if not ids:
        return []

    active = (Interest.is_active.is_(True), Interest.swap_request_id.in_(ids))
    counts = dict(db.execute(
        select(Interest.swap_request_id, func.count(Interest.id))
        .where(*active)
        .group_by(Interest.swap_request_id)
    ).all())
    mine = dict(db.execute(
        select(Interest.swap_request_id, Interest.id)
        .where(*active, Interest.interested_user_id == user_id)
    ).all())

    return [
        {
            "id": r.id,
            "requester": r.requester,
            "have_shift": r.have_shift,
            "want_type": r.want_type,
            "want_dates": r.want_dates,
            "time_rule": r.time_rule,
            "time_value": r.time_value,
            "note": r.note,
            "created_at": r.created_at,
            "has_my_interest": r.id in mine,
            "my_interest_id": mine.get(r.id),
            "interest_count": counts.get(r.id, 0),
        }
        for r in requests
    ]


def list_own_requests(db: Session, user_id: int) -> list[dict]:
    stmt = (
        select(SwapRequest)
        .options(joinedload(SwapRequest.have_shift))
        .where(SwapRequest.is_active.is_(True), SwapRequest.requester_user_id == user_id)
        .order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
    )
    requests = list(db.scalars(stmt).unique())
    if not requests:
        return []

    interests = db.scalars(
        select(Interest)
        .options(joinedload(Interest.interested_user), joinedload(Interest.offered_shift))
        .where(Interest.is_active.is_(True), Interest.swap_request_id.in_([r.id for r in requests]))
        .order_by(Interest.created_at, Interest.id)
    ).unique()
    by_request: dict[int, list[Interest]] = {}
    for i in interests:
        by_request.setdefault(i.swap_request_id, []).append(i)

    return [
        {
            "id": r.id,
            "have_shift": r.have_shift,
            "want_type": r.want_type,
            "want_dates": r.want_dates,
            "time_rule": r.time_rule,
            "time_value": r.time_value,
            "note": r.note,
            "created_at": r.created_at,
            "interests": by_request.get(r.id, []),
        }
        for r in requests
    ]


def list_eligible_shifts(db: Session, request_id: int, user_id: int) -> list[Shift]:
    """The caller's shifts that could be offered against a request."""
    req = get_active_request(db, request_id)
    if not req:
        raise NotFound("Swap request not found")
    if req.requester_user_id == user_id:
        raise Forbidden("Cannot offer a shift against your own swap request")

    shifts = db.scalars(
        select(Shift).where(Shift.user_id == user_id).order_by(Shift.date, Shift.start, Shift.id)
    )
    return [s for s in shifts if is_eligible(req, s).eligible]
