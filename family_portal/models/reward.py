from __future__ import annotations
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .member import Member


class RewardCategory(StrEnum):
    DIGITAL = "Digital"
    LEISURE = "Leisure"
    TREATS = "Treats"
    EVENTS = "Events"


class Reward(Base):
    __table_args__ = (CheckConstraint("cost >= 0", name="ck_reward_cost_nonnegative"),)

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    cost: Mapped[int] = mapped_column(Integer, nullable=False)
    icon: Mapped[str] = mapped_column(String(16), default="🎁", nullable=False)
    category: Mapped[RewardCategory] = mapped_column(default=RewardCategory.DIGITAL)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class RequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class RewardRequest(Base):
    __tablename__ = "reward_request"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )

    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member.id", ondelete="CASCADE"),
        index=True,
    )
    member_name: Mapped[str] = mapped_column(String(128), nullable=False)

    # the catalog entry may be edited or deleted later; title and cost are snapshots
    reward_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("reward.id", ondelete="SET NULL"),
    )
    reward_title: Mapped[str] = mapped_column(String(200), nullable=False)
    cost: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[RequestStatus] = mapped_column(
        default=RequestStatus.PENDING,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    member: Mapped["Member"] = relationship(back_populates="reward_requests")
