from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...core.config import settings
from ...db.session import transaction
from ...models.member import Member
from ...schemas.activity_log import ActivityLogCreate, ActivityLogOut
from ...services.activity_log import list_for_member, list_recent, record_activity
from ...services.errors import InvalidInput
from ...services.member_service import get_member
from ..deps import get_db, require_adult

router = APIRouter()


@router.get("", response_model=list[ActivityLogOut])
def recent_logs(
    limit: int = Query(default=settings.ACTIVITY_LOG_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return list_recent(db, limit=limit)


@router.post("", response_model=ActivityLogOut, status_code=status.HTTP_201_CREATED)
def add_log(
    payload: ActivityLogCreate,
    db: Session = Depends(get_db),
    _: Member = Depends(require_adult),
):
    if not payload.action:
        raise InvalidInput("Action is required")
    member = get_member(db, payload.member_id) if payload.member_id else None
    with transaction(db):
        entry = record_activity(db, action=payload.action, log_type=payload.type, member=member)
    return entry


@router.get("/member/{member_id}", response_model=list[ActivityLogOut])
def member_logs(
    member_id: str,
    limit: int = Query(default=settings.ACTIVITY_LOG_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return list_for_member(db, member_id=member_id, limit=limit)
