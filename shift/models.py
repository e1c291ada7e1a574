from __future__ import annotations
from typing import TYPE_CHECKING
from datetime import datetime
from sqlalchemy import DateTime, Integer, String, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from user.models import User
    from swaprequest.models import SwapRequest


class Shift(Base):
    __tablename__ = "shifts"

    id: Mapped[int] = mapped_column(primary_key=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )

    # canonical local strings, no offset: YYYY-MM-DD / HH:MM
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    start: Mapped[str] = mapped_column(String(5), nullable=False)
    end: Mapped[str] = mapped_column(String(5), nullable=False)
    duration_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    user: Mapped["User"] = relationship("User", back_populates="shifts")
    swap_requests: Mapped[list["SwapRequest"]] = relationship(
        "SwapRequest", back_populates="have_shift", cascade="all, delete-orphan", passive_deletes=True
    )

Index("ix_shifts_user_date", Shift.user_id, Shift.date)
Index("ix_shifts_date", Shift.date)
