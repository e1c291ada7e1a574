from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.config_loader import settings
from auth.services.auth_service import get_current_active_user
from cleanup.service import sweeper
from .schemas import ShiftSchema, MyShiftSchema, ShiftCreatePayload, ShiftCreate, TimeOptions
from .timewindow import time_options, max_allowed_date
from shift import service

user_shift_router = APIRouter(prefix="/user/shifts", tags=["Shifts"])
shift_router = APIRouter(prefix="/shifts", tags=["Shifts"])


@user_shift_router.get("", response_model=list[MyShiftSchema])
def list_my_shifts(db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    sweeper.run_if_due(db)
    return service.get_user_shifts(db, user.id)


@user_shift_router.post("", response_model=ShiftSchema, status_code=status.HTTP_201_CREATED)
def create_shift(payload: ShiftCreatePayload, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    internal = ShiftCreate(user_id=user.id, **payload.model_dump())
    return service.create_shift(db, internal)


@user_shift_router.delete("/{shift_id}")
def delete_shift(shift_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    service.delete_shift(db, shift_id, user.id)
    return {"message": "Shift deleted"}


@shift_router.get("/time-options", response_model=TimeOptions)
def get_time_options():
    return TimeOptions(
        times=time_options(),
        durations=list(settings.ALLOWED_DURATIONS),
        max_date=max_allowed_date().isoformat(),
    )
