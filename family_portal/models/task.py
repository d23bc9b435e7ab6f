from __future__ import annotations
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .member import Member

class TaskCategory(StrEnum):
    SCHOOL = "School"
    CHORES = "Chores"
    HEALTH = "Health"
    PERSONAL = "Personal"

class Recurrence(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    WEEKLY = "weekly"

class Task(Base):
    __table_args__ = (CheckConstraint("points >= 0", name="ck_task_points_nonnegative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    member_id: Mapped[str] = mapped_column(String(36), ForeignKey("member.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    category: Mapped[TaskCategory] = mapped_column(default=TaskCategory.CHORES)
    recurrence: Mapped[Recurrence] = mapped_column(default=Recurrence.NONE, index=True)
    # advisory "HH:MM" window, shown to the member but never enforced
    schedule_start: Mapped[str | None] = mapped_column(String(5))
    schedule_end: Mapped[str | None] = mapped_column(String(5))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    member: Mapped["Member"] = relationship(back_populates="tasks")
