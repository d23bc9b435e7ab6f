import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.locks import MemberLocks
from ..db.session import transaction
from ..models.activity_log import LogType
from ..models.punishment import Punishment, PunishmentType
from .activity_log import record_activity
from .errors import InvalidInput
from .ledger import PointsLedger
from .notifications import EventKind, NotificationEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunishmentResult:
    punishment: Punishment
    new_balance: int
    event: NotificationEvent


def apply_punishment(
    db: Session,
    locks: MemberLocks,
    ledger: PointsLedger,
    *,
    member_id: str,
    kind: PunishmentType,
    reason: str = "",
    duration: int | None = None,
    amount: int | None = None,
) -> PunishmentResult:
    """Record a punishment. ``PointLoss`` takes ``amount`` points through the ledger;
    ``Block`` is only recorded, network enforcement lives elsewhere."""
    if kind == PunishmentType.POINT_LOSS and amount is None:
        raise InvalidInput("amount is required for PointLoss")
    if kind == PunishmentType.BLOCK and duration is None:
        raise InvalidInput("duration is required for Block")

    with locks.hold(member_id), transaction(db):
        member = ledger.load_member(member_id)
        p = Punishment(
            member_id=member.id,
            type=kind,
            reason=reason,
            duration=duration if kind == PunishmentType.BLOCK else None,
            points=amount if kind == PunishmentType.POINT_LOSS else None,
        )
        db.add(p)

        if kind == PunishmentType.POINT_LOSS:
            new_balance = ledger.post(member, -amount, f"Penalty: {reason or 'points removed'}")
            title, event_amount = reason or "Point loss", amount
        else:
            record_activity(
                db,
                action=f"Blocked for {duration}h: {reason or 'no reason given'}",
                log_type=LogType.WARNING,
                member=member,
            )
            new_balance = member.points
            title, event_amount = reason or "Block", 0
        db.flush()

        logger.info(f"Punishment {p.type} applied to member {member.id}")
        return PunishmentResult(
            punishment=p,
            new_balance=new_balance,
            event=NotificationEvent(
                kind=EventKind.PUNISHMENT_APPLIED,
                member_name=member.name,
                title=title,
                amount=event_amount,
                new_balance=new_balance,
            ),
        )


def list_punishments(db: Session, *, member_id: str) -> list[Punishment]:
    stmt = select(Punishment).where(Punishment.member_id == member_id).order_by(Punishment.created_at.desc())
    return list(db.execute(stmt).scalars())
