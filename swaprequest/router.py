from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from cleanup.service import sweeper
from shift.schemas import ShiftSchema
from .schemas import (
    SwapRequestSchema,
    SwapRequestCreatePayload,
    SwapRequestCreate,
    BrowsableSwapRequest,
    OwnSwapRequest,
)
from swaprequest import service

swap_request_router = APIRouter(prefix="/swap-requests", tags=["Swap Requests"])
user_swap_request_router = APIRouter(prefix="/user/swap-requests", tags=["Swap Requests"])


# Browse other workers' active requests
@swap_request_router.get("", response_model=list[BrowsableSwapRequest])
def list_swap_requests(db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    sweeper.run_if_due(db)
    return service.list_browsable_requests(db, user.id)


@swap_request_router.post("", response_model=SwapRequestSchema, status_code=status.HTTP_201_CREATED)
def create_swap_request(
    payload: SwapRequestCreatePayload,
    db: Session = Depends(get_db),
    user = Depends(get_current_active_user),
    ):
    dto = SwapRequestCreate(
        requester_user_id=user.id,
        have_shift_id=payload.have_shift_id,
        want=payload.to_want(),
        time_rule=payload.to_time_rule(),
        note=payload.note,
    )
    return service.create_request(db, dto)


# Which of my shifts could I offer against this request
@swap_request_router.get("/{request_id}/eligible-shifts", response_model=list[ShiftSchema])
def eligible_shifts(request_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    return service.list_eligible_shifts(db, request_id, user.id)


@swap_request_router.delete("/{request_id}")
def delete_swap_request(request_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    service.delete_request(db, request_id, user.id)
    return {"message": "Swap request deleted successfully"}


@user_swap_request_router.get("", response_model=list[OwnSwapRequest])
def list_my_swap_requests(db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    sweeper.run_if_due(db)
    return service.list_own_requests(db, user.id)
