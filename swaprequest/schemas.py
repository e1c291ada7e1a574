from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shift.schemas import ShiftSchema
from shift.timewindow import validate_date_range, is_valid_time
from user.schemas import UserPublic
from .rules import (
    WantType, TimeRuleKind, Want, TimeRule,
    SameDay, DateList, AnyTime, ExactStart, EndNotAfter,
)


class SwapRequestSchema(BaseModel):
    id: int
    requester_user_id: int
    have_shift_id: int
    want_type: WantType
    want_dates: Optional[list[str]] = None
    time_rule: TimeRuleKind
    time_value: Optional[str] = None
    note: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from clients
class SwapRequestCreatePayload(BaseModel):
    have_shift_id: int
    want_type: WantType
    want_dates: Optional[list[str]] = None
    time_rule: TimeRuleKind = TimeRuleKind.ANY
    time_value: Optional[str] = None
    note: Optional[str] = Field(None, max_length=500)

    model_config = ConfigDict(extra="forbid")

    @field_validator("want_dates")
    @classmethod
    def dates_in_window(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        for d in v:
            err = validate_date_range(d)
            if err:
                raise ValueError(f"{d}: {err}")
        return list(dict.fromkeys(v))

    @field_validator("time_value")
    @classmethod
    def time_format(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_time(v):
            raise ValueError("Time value must be in HH:MM format")
        return v

    @model_validator(mode="after")
    def discriminants(self):
        if self.want_type is WantType.DATE_LIST and not self.want_dates:
            raise ValueError("Want dates are required when want type is DATE_LIST")
        if self.time_rule is not TimeRuleKind.ANY and not self.time_value:
            raise ValueError(f"Time value is required when time rule is {self.time_rule.value}")
        return self

    def to_want(self) -> Want:
        if self.want_type is WantType.DATE_LIST:
            return DateList(tuple(self.want_dates))
        return SameDay()

    def to_time_rule(self) -> TimeRule:
        if self.time_rule is TimeRuleKind.EXACT_START:
            return ExactStart(self.time_value)
        if self.time_rule is TimeRuleKind.END_NOT_AFTER:
            return EndNotAfter(self.time_value)
        return AnyTime()


# Internal DTO the service uses
@dataclass(frozen=True)
class SwapRequestCreate:
    requester_user_id: int
    have_shift_id: int
    want: Want
    time_rule: TimeRule
    note: Optional[str] = None


class _SwapRequestView(BaseModel):
    id: int
    have_shift: ShiftSchema
    want_type: WantType
    want_dates: Optional[list[str]] = None
    time_rule: TimeRuleKind
    time_value: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Browse feed row; other interested users stay anonymous
class BrowsableSwapRequest(_SwapRequestView):
    requester: UserPublic
    has_my_interest: bool
    my_interest_id: Optional[int] = None
    interest_count: int


class InterestDetail(BaseModel):
    id: int
    interested_user: UserPublic
    offered_shift: ShiftSchema
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OwnSwapRequest(_SwapRequestView):
    interests: list[InterestDetail] = []
