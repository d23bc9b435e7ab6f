from __future__ import annotations
from datetime import date, datetime
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import CheckConstraint, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .task import Task
    from .reward import RewardRequest
    from .punishment import Punishment

class MemberRole(StrEnum):
    CHILD = "Child"
    ADULT = "Adult"
    GUEST = "Guest"
    STAFF = "Staff"
    OTHER = "Other"

class Member(Base):
    __table_args__ = (CheckConstraint("points >= 0", name="ck_member_points_nonnegative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(512))
    role: Mapped[MemberRole] = mapped_column(default=MemberRole.CHILD)
    birthday: Mapped[date | None] = mapped_column(Date)
    pin_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_streak_date: Mapped[date | None] = mapped_column(Date)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    tasks: Mapped[list["Task"]] = relationship(back_populates="member", cascade="all,delete-orphan")
    reward_requests: Mapped[list["RewardRequest"]] = relationship(back_populates="member", cascade="all,delete-orphan")
    punishments: Mapped[list["Punishment"]] = relationship(back_populates="member", cascade="all,delete-orphan")
