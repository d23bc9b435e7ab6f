from datetime import date
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.member import Member, MemberRole
from .errors import NotFound
from .security import hash_pin, verify_pin

logger = logging.getLogger(__name__)

def create_member(
    db: Session, *,
    name: str,
    pin: str,
    role: MemberRole = MemberRole.CHILD,
    avatar: str | None = None,
    birthday: date | None = None,
    points: int = 0,
) -> Member:
    try:
        member = Member(
            name=name,
            pin_hash=hash_pin(pin),
            role=role,
            avatar=avatar,
            birthday=birthday,
            points=max(0, points),
        )
        db.add(member)
        db.commit()
        db.refresh(member)
        logger.info(f"Member created: id={member.id}, name={member.name}, role={member.role}")
        return member
    except Exception as e:
        logger.error(f"Error creating member {name}: {str(e)}", exc_info=True)
        db.rollback()
        raise

def get_member(db: Session, member_id: str) -> Member:
    member = db.get(Member, member_id)
    if not member:
        raise NotFound("Member", member_id)
    return member

def list_members(db: Session) -> list[Member]:
    return list(db.execute(select(Member).order_by(Member.created_at)).scalars())

def update_member(
    db: Session, *,
    member_id: str,
    name: str | None = None,
    avatar: str | None = None,
    role: MemberRole | None = None,
    birthday: date | None = None,
    pin: str | None = None,
) -> Member:
    member = get_member(db, member_id)
    if name is not None:
        member.name = name
    if avatar is not None:
        member.avatar = avatar
    if role is not None:
        member.role = role
    if birthday is not None:
        member.birthday = birthday
    if pin is not None:
        member.pin_hash = hash_pin(pin)
    db.commit()
    db.refresh(member)
    return member

def delete_member(db: Session, member_id: str) -> None:
    # tasks, reward requests and punishments go with the member
    member = get_member(db, member_id)
    db.delete(member)
    db.commit()
    logger.info(f"Member deleted: id={member_id}")

def authenticate_pin(db: Session, *, member_id: str, pin: str) -> Member | None:
    member = db.get(Member, member_id)
    if not member:
        return None
    if not verify_pin(pin, member.pin_hash):
        return None
    return member
