# interest/service.py
from __future__ import annotations
from typing import Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from core.database import commit_or_conflict
from core.errors import NotFound, Forbidden, Conflict, RuleViolation
from shift.models import Shift
from swaprequest.eligibility import is_eligible
from swaprequest.models import SwapRequest
from swaprequest.service import get_active_request
from .models import Interest

log = structlog.get_logger(__name__)

DUPLICATE_INTEREST = "You have already expressed interest in this swap request"


def _find_active_interest(db: Session, request_id: int, user_id: int) -> Optional[Interest]:
    stmt = select(Interest).where(
        Interest.swap_request_id == request_id,
        Interest.interested_user_id == user_id,
        Interest.is_active.is_(True),
    )
    return db.scalars(stmt).first()


def express_interest(db: Session, user_id: int, request_id: int, offered_shift_id: int) -> Interest:
    req = get_active_request(db, request_id)
    if not req:
        raise NotFound("Swap request not found")

    offered = db.get(Shift, offered_shift_id)
    if not offered or offered.user_id != user_id:
        raise NotFound("Offered shift not found or not owned by user")

    if req.requester_user_id == user_id:
        raise Forbidden("Cannot express interest in your own swap request")

    verdict = is_eligible(req, offered)
    if not verdict.eligible:
        raise RuleViolation(verdict.message, reason=verdict.reason.value)

    if _find_active_interest(db, request_id, user_id):
        raise Conflict(DUPLICATE_INTEREST)

    row = Interest(
        swap_request_id=request_id,
        interested_user_id=user_id,
        offered_shift_id=offered.id,
        is_active=True,
    )
    db.add(row)
    commit_or_conflict(db, DUPLICATE_INTEREST)
    db.refresh(row)
    log.info("interest_created", interest_id=row.id, swap_request_id=request_id, offered_shift_id=offered.id)
    return row


def withdraw_interest(db: Session, user_id: int, request_id: int) -> int:
    result = db.execute(
        update(Interest)
        .where(
            Interest.swap_request_id == request_id,
            Interest.interested_user_id == user_id,
            Interest.is_active.is_(True),
        )
        .values(is_active=False)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFound("No active interest found to withdraw")
    db.commit()
    log.info("interest_withdrawn", swap_request_id=request_id, count=result.rowcount)
    return result.rowcount


def list_my_interests(db: Session, user_id: int) -> list[Interest]:
    stmt = (
        select(Interest)
        .join(SwapRequest, SwapRequest.id == Interest.swap_request_id)
        .options(
            joinedload(Interest.swap_request).joinedload(SwapRequest.have_shift),
            joinedload(Interest.offered_shift),
        )
        .where(
            Interest.interested_user_id == user_id,
            Interest.is_active.is_(True),
            SwapRequest.is_active.is_(True),
        )
        .order_by(Interest.created_at.desc(), Interest.id.desc())
    )
    return list(db.scalars(stmt).unique())
