from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from shift.timewindow import validate_date_range, validate_time_slot, valid_duration
from core.config_loader import settings


class ShiftSchema(BaseModel):
    id: int
    user_id: int
    date: str
    start: str
    end: str
    duration_hours: int

    model_config = ConfigDict(from_attributes=True)


# Own-shift listing row
class MyShiftSchema(ShiftSchema):
    has_active_swap_request: bool = False


class ShiftCreatePayload(BaseModel):
    date: str
    start: str
    end: str
    duration_hours: int

    model_config = ConfigDict(extra="forbid")

    @field_validator("date")
    @classmethod
    def date_in_window(cls, v: str) -> str:
        err = validate_date_range(v)
        if err:
            raise ValueError(err)
        return v

    @field_validator("duration_hours")
    @classmethod
    def duration_allowed(cls, v: int) -> int:
        if not valid_duration(v):
            allowed = " or ".join(str(h) for h in settings.ALLOWED_DURATIONS)
            raise ValueError(f"Duration must be either {allowed} hours")
        return v

    @model_validator(mode="after")
    def time_slot(self):
        err = validate_time_slot(self.start, self.end)
        if err:
            raise ValueError(err)
        return self


# Internal DTO the service uses
class ShiftCreate(BaseModel):
    user_id: int
    date: str
    start: str
    end: str
    duration_hours: int


class TimeOptions(BaseModel):
    times: list[str]
    durations: list[int]
    max_date: Optional[str] = None
