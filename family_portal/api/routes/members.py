from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from ...db.locks import MemberLocks
from ...models.member import Member
from ...schemas.member import (
    MemberCreate,
    MemberDetailOut,
    MemberOut,
    MemberUpdate,
    PointsAdjust,
    PointsOut,
)
from ...schemas.punishment import PunishmentApplied, PunishmentCreate, PunishmentOut
from ...schemas.reward import RewardRequestOut
from ...services.errors import InvalidInput
from ...services.ledger import PointsLedger
from ...services.member_service import (
    create_member,
    delete_member,
    get_member,
    list_members,
    update_member,
)
from ...services.notifications import NotificationDispatcher
from ...services.punishment_service import apply_punishment, list_punishments
from ...services.reward_service import list_requests_for_member
from ..deps import get_db, get_dispatcher, get_ledger, get_locks, require_adult

router = APIRouter()


@router.get("", response_model=list[MemberOut])
def all_members(db: Session = Depends(get_db)):
    return list_members(db)


@router.post("", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
def add_member(payload: MemberCreate, db: Session = Depends(get_db)):
    return create_member(
        db,
        name=payload.name,
        pin=payload.pin,
        role=payload.role,
        avatar=payload.avatar,
        birthday=payload.birthday,
        points=payload.points,
    )


@router.get("/{member_id}", response_model=MemberDetailOut)
def member_detail(member_id: str, db: Session = Depends(get_db)):
    return get_member(db, member_id)


@router.put("/{member_id}", response_model=MemberOut)
def edit_member(member_id: str, payload: MemberUpdate, db: Session = Depends(get_db)):
    return update_member(
        db,
        member_id=member_id,
        name=payload.name,
        pin=payload.pin,
        role=payload.role,
        avatar=payload.avatar,
        birthday=payload.birthday,
    )


@router.delete("/{member_id}")
def remove_member(member_id: str, db: Session = Depends(get_db)):
    delete_member(db, member_id)
    return {"success": True}


# ------------------------------------------------------------------------
# Points
# ------------------------------------------------------------------------
@router.post("/{member_id}/adjust-points", response_model=PointsOut)
def adjust_points(
    member_id: str,
    payload: PointsAdjust,
    ledger: PointsLedger = Depends(get_ledger),
    _: Member = Depends(require_adult),
):
    if payload.amount is None:
        raise InvalidInput("Amount is required")
    reason = payload.reason or "Points adjusted"
    return PointsOut(new_points=ledger.apply_delta(member_id, payload.amount, reason))


@router.get("/{member_id}/requests", response_model=list[RewardRequestOut])
def member_requests(member_id: str, db: Session = Depends(get_db)):
    get_member(db, member_id)
    return list_requests_for_member(db, member_id=member_id)


# ------------------------------------------------------------------------
# Punishments
# ------------------------------------------------------------------------
@router.get("/{member_id}/punishments", response_model=list[PunishmentOut])
def member_punishments(member_id: str, db: Session = Depends(get_db)):
    get_member(db, member_id)
    return list_punishments(db, member_id=member_id)


@router.post(
    "/{member_id}/punishments",
    response_model=PunishmentApplied,
    status_code=status.HTTP_201_CREATED,
)
def punish(
    member_id: str,
    payload: PunishmentCreate,
    background: BackgroundTasks,
    db: Session = Depends(get_db),
    locks: MemberLocks = Depends(get_locks),
    ledger: PointsLedger = Depends(get_ledger),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    _: Member = Depends(require_adult),
):
    result = apply_punishment(
        db,
        locks,
        ledger,
        member_id=member_id,
        kind=payload.type,
        reason=payload.reason,
        duration=payload.duration,
        amount=payload.amount,
    )
    background.add_task(dispatcher.dispatch, result.event)
    return PunishmentApplied(
        punishment=PunishmentOut.model_validate(result.punishment),
        new_points=result.new_balance,
    )
