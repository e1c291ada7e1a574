"""What a requester will accept in return, as tagged variants.

The table stores ``want_type``/``want_dates`` and ``time_rule``/``time_value``
side by side; these classes are the only way services build or read them, so
a DATE_LIST without dates or an EXACT_START without a time cannot exist.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class WantType(str, Enum):
    SAME_DAY = "SAME_DAY"
    DATE_LIST = "DATE_LIST"


class TimeRuleKind(str, Enum):
    ANY = "ANY"
    EXACT_START = "EXACT_START"
    END_NOT_AFTER = "END_NOT_AFTER"


@dataclass(frozen=True)
class SameDay:
    type = WantType.SAME_DAY

    def columns(self) -> tuple[WantType, Optional[list[str]]]:
        return self.type, None


@dataclass(frozen=True)
class DateList:
    dates: tuple[str, ...]
    type = WantType.DATE_LIST

    def __post_init__(self):
        if not self.dates:
            raise ValueError("Want dates are required when want type is DATE_LIST")

    def columns(self) -> tuple[WantType, Optional[list[str]]]:
        return self.type, list(self.dates)


Want = Union[SameDay, DateList]


@dataclass(frozen=True)
class AnyTime:
    kind = TimeRuleKind.ANY

    def columns(self) -> tuple[TimeRuleKind, Optional[str]]:
        return self.kind, None


@dataclass(frozen=True)
class ExactStart:
    time: str
    kind = TimeRuleKind.EXACT_START

    def columns(self) -> tuple[TimeRuleKind, Optional[str]]:
        return self.kind, self.time


@dataclass(frozen=True)
class EndNotAfter:
    time: str
    kind = TimeRuleKind.END_NOT_AFTER

    def columns(self) -> tuple[TimeRuleKind, Optional[str]]:
        return self.kind, self.time


TimeRule = Union[AnyTime, ExactStart, EndNotAfter]


def want_from_columns(want_type: WantType, want_dates: Optional[list[str]]) -> Want:
    if WantType(want_type) is WantType.DATE_LIST:
        return DateList(tuple(want_dates or ()))
    return SameDay()


def time_rule_from_columns(kind: TimeRuleKind, value: Optional[str]) -> TimeRule:
    kind = TimeRuleKind(kind)
    if kind is TimeRuleKind.ANY:
        return AnyTime()
    if not value:
        raise ValueError(f"Time value is required when time rule is {kind.value}")
    if kind is TimeRuleKind.EXACT_START:
        return ExactStart(value)
    return EndNotAfter(value)
