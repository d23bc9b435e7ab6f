from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.base_class import Base
from . import utcnow

class LogType(StrEnum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"
    ERROR = "error"

class ActivityLog(Base):
    __tablename__ = "activity_log"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    member_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("member.id", ondelete="SET NULL"), index=True)
    member_name: Mapped[str | None] = mapped_column(String(128))
    action: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[LogType] = mapped_column(default=LogType.INFO)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
