from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from shift.schemas import ShiftSchema
from swaprequest.rules import WantType, TimeRuleKind


class InterestSchema(BaseModel):
    id: int
    swap_request_id: int
    interested_user_id: int
    offered_shift_id: int
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class InterestCreatePayload(BaseModel):
    swap_request_id: int
    offered_shift_id: int

    model_config = ConfigDict(extra="forbid")


class WithdrawResult(BaseModel):
    withdrawn: int
    message: str


class _RequestSummary(BaseModel):
    id: int
    have_shift: ShiftSchema
    want_type: WantType
    want_dates: Optional[list[str]] = None
    time_rule: TimeRuleKind
    time_value: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class MyInterest(BaseModel):
    id: int
    swap_request: _RequestSummary
    offered_shift: ShiftSchema
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
