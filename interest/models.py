from __future__ import annotations
from typing import TYPE_CHECKING
from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, text
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from user.models import User
    from shift.models import Shift
    from swaprequest.models import SwapRequest


class Interest(Base):
    __tablename__ = "interests"

    id: Mapped[int] = mapped_column(primary_key=True)
    swap_request_id: Mapped[int] = mapped_column(
        ForeignKey("swap_requests.id", ondelete="CASCADE"), index=True
    )
    interested_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    offered_shift_id: Mapped[int] = mapped_column(
        ForeignKey("shifts.id", ondelete="CASCADE"), index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    swap_request: Mapped["SwapRequest"] = relationship("SwapRequest", back_populates="interests")
    interested_user: Mapped["User"] = relationship("User")
    offered_shift: Mapped["Shift"] = relationship("Shift")


# one active interest per user per request
Index(
    "uq_interests_active_request_user",
    Interest.swap_request_id,
    Interest.interested_user_id,
    unique=True,
    sqlite_where=text("is_active"),
    postgresql_where=text("is_active"),
)
