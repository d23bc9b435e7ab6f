from __future__ import annotations
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.base_class import Base
from . import utcnow

if TYPE_CHECKING:
    from .member import Member

class PunishmentType(StrEnum):
    BLOCK = "Block"
    POINT_LOSS = "PointLoss"

class Punishment(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    member_id: Mapped[str] = mapped_column(String(36), ForeignKey("member.id", ondelete="CASCADE"), index=True)
    type: Mapped[PunishmentType] = mapped_column()
    duration: Mapped[int | None] = mapped_column(Integer)  # hours, for Block
    points: Mapped[int | None] = mapped_column(Integer)  # amount taken, for PointLoss
    reason: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    member: Mapped["Member"] = relationship(back_populates="punishments")
