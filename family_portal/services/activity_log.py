from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.activity_log import ActivityLog, LogType
from ..models.member import Member


def record_activity(
    db: Session,
    *,
    action: str,
    log_type: LogType = LogType.INFO,
    member: Member | None = None,
) -> ActivityLog:
    """Append an audit entry to the current transaction (the caller commits)."""
    entry = ActivityLog(
        member_id=member.id if member else None,
        member_name=member.name if member else None,
        action=action,
        type=log_type,
    )
    db.add(entry)
    return entry


def list_recent(db: Session, *, limit: int = 50) -> list[ActivityLog]:
    stmt = select(ActivityLog).order_by(ActivityLog.created_at.desc()).limit(limit)
    return list(db.execute(stmt).scalars())


def list_for_member(db: Session, *, member_id: str, limit: int = 50) -> list[ActivityLog]:
    stmt = (
        select(ActivityLog)
        .where(ActivityLog.member_id == member_id)
        .order_by(ActivityLog.created_at.desc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars())
