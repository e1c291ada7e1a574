from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from .schemas import InterestSchema, InterestCreatePayload, WithdrawResult, MyInterest
from interest import service

interest_router = APIRouter(prefix="/interests", tags=["Interests"])


@interest_router.get("/mine", response_model=list[MyInterest])
def list_my_interests(db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    return service.list_my_interests(db, user.id)


@interest_router.post("", response_model=InterestSchema, status_code=status.HTTP_201_CREATED)
def express_interest(payload: InterestCreatePayload, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    return service.express_interest(db, user.id, payload.swap_request_id, payload.offered_shift_id)


@interest_router.delete("", response_model=WithdrawResult)
def withdraw_interest(
    swap_request_id: int = Query(..., description="Request to withdraw from"),
    db: Session = Depends(get_db),
    user = Depends(get_current_active_user),
    ):
    count = service.withdraw_interest(db, user.id, swap_request_id)
    return WithdrawResult(withdrawn=count, message=f"Successfully withdrew {count} interest(s).")
