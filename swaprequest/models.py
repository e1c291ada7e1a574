from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, JSON, String, Text, Enum as SAEnum, text
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base
from .rules import WantType, TimeRuleKind, Want, TimeRule, want_from_columns, time_rule_from_columns

if TYPE_CHECKING:
    from user.models import User
    from shift.models import Shift
    from interest.models import Interest


class SwapRequest(Base):
    __tablename__ = "swap_requests"

    id: Mapped[int] = mapped_column(primary_key=True)

    requester_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    have_shift_id: Mapped[int] = mapped_column(
        ForeignKey("shifts.id", ondelete="CASCADE"), index=True
    )

    want_type: Mapped[WantType] = mapped_column(SAEnum(WantType, name="want_type"), nullable=False)
    want_dates: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)
    time_rule: Mapped[TimeRuleKind] = mapped_column(
        SAEnum(TimeRuleKind, name="time_rule"), nullable=False, default=TimeRuleKind.ANY
    )
    time_value: Mapped[str | None] = mapped_column(String(5), nullable=True)
    note: Mapped[str | None] = mapped_column(Text(), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    requester: Mapped["User"] = relationship("User")
    have_shift: Mapped["Shift"] = relationship("Shift", back_populates="swap_requests")
    interests: Mapped[list["Interest"]] = relationship(
        "Interest", back_populates="swap_request", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def want(self) -> Want:
        return want_from_columns(self.want_type, self.want_dates)

    @want.setter
    def want(self, value: Want) -> None:
        self.want_type, self.want_dates = value.columns()

    @property
    def time_constraint(self) -> TimeRule:
        return time_rule_from_columns(self.time_rule, self.time_value)

    @time_constraint.setter
    def time_constraint(self, value: TimeRule) -> None:
        self.time_rule, self.time_value = value.columns()


# one active request per shift; inactive history rows are unconstrained
Index(
    "uq_swap_requests_active_shift",
    SwapRequest.have_shift_id,
    unique=True,
    sqlite_where=text("is_active"),
    postgresql_where=text("is_active"),
)
Index("ix_swap_requests_active_created", SwapRequest.is_active, SwapRequest.created_at)
