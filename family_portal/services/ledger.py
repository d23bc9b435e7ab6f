import logging

from sqlalchemy.orm import Session

from ..db.locks import MemberLocks
from ..db.session import transaction
from ..models.activity_log import LogType
from ..models.member import Member
from .activity_log import record_activity
from .errors import NotFound

logger = logging.getLogger(__name__)


def describe_delta(reason: str, delta: int) -> str:
    return f"{reason} ({delta:+d} points)"


class PointsLedger:
    """Signed point changes on a member's balance, floored at zero.

    Every change appends one activity entry. The entry states the requested
    delta, so when a decrement is clamped the logged amount is larger than the
    actual change; compare balances before and after for exact accounting.
    """

    def __init__(self, db: Session, locks: MemberLocks):
        self.db = db
        self.locks = locks

    def load_member(self, member_id: str) -> Member:
        member = self.db.get(Member, member_id, populate_existing=True, with_for_update=True)
        if member is None:
            raise NotFound("Member", member_id)
        return member

    def apply_delta(self, member_id: str, delta: int, reason: str) -> int:
        with self.locks.hold(member_id), transaction(self.db):
            member = self.load_member(member_id)
            return self.post(member, delta, reason)

    def post(self, member: Member, delta: int, reason: str, *, log_type: LogType | None = None) -> int:
        """Apply ``delta`` inside the caller's transaction and return the new balance."""
        before = member.points
        member.points = max(0, before + delta)
        if log_type is None:
            log_type = LogType.SUCCESS if delta > 0 else LogType.WARNING
        record_activity(self.db, action=describe_delta(reason, delta), log_type=log_type, member=member)
        logger.info(f"Points for member {member.id}: {before} -> {member.points} (requested {delta:+d}, {reason})")
        return member.points
