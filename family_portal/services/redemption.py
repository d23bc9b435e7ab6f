"""Reward redemption with an adult approval gate.

A redemption either settles at once or, above the approval threshold, parks
as a pending ``RewardRequest``. Both paths take the points immediately so a
member cannot spend the same points twice while waiting. Approval keeps the
deduction; denial refunds exactly the recorded cost. A request leaves
``pending`` once and only once.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ..db.locks import MemberLocks
from ..db.session import transaction
from ..models import utcnow
from ..models.activity_log import LogType
from ..models.reward import RequestStatus, Reward, RewardRequest
from .activity_log import record_activity
from .errors import AlreadyProcessed, InsufficientPoints, NotFound
from .ledger import PointsLedger
from .notifications import EventKind, NotificationEvent

logger = logging.getLogger(__name__)

DEFAULT_APPROVAL_THRESHOLD = 1000


@dataclass(frozen=True)
class RedemptionResult:
    settled: bool
    requires_approval: bool
    new_balance: int
    event: NotificationEvent
    request_id: str | None = None


@dataclass(frozen=True)
class ProcessResult:
    request: RewardRequest
    approved: bool
    new_balance: int
    event: NotificationEvent


class RewardRedemptionWorkflow:
    def __init__(
        self,
        db: Session,
        locks: MemberLocks,
        ledger: PointsLedger,
        *,
        approval_threshold: int = DEFAULT_APPROVAL_THRESHOLD,
    ):
        self.db = db
        self.locks = locks
        self.ledger = ledger
        self.approval_threshold = approval_threshold

    def requires_approval(self, cost: int) -> bool:
        return cost > self.approval_threshold

    def redeem(self, *, member_id: str, reward_id: str) -> RedemptionResult:
        with self.locks.hold(member_id), transaction(self.db):
            reward = self.db.get(Reward, reward_id)
            if reward is None:
                raise NotFound("Reward", reward_id)
            member = self.ledger.load_member(member_id)

            if member.points < reward.cost:
                logger.warning(
                    f"Member {member.id} cannot afford reward {reward.id}: {member.points} < {reward.cost}"
                )
                raise InsufficientPoints(member.points, reward.cost)

            if not self.requires_approval(reward.cost):
                new_balance = self.ledger.post(
                    member, -reward.cost, f'Redeemed "{reward.title}"', log_type=LogType.SUCCESS
                )
                logger.info(f"Member {member.id} redeemed reward {reward.id}, balance {new_balance}")
                return RedemptionResult(
                    settled=True,
                    requires_approval=False,
                    new_balance=new_balance,
                    event=NotificationEvent(
                        kind=EventKind.REWARD_REDEEMED,
                        member_name=member.name,
                        title=reward.title,
                        amount=reward.cost,
                        new_balance=new_balance,
                    ),
                )

            request = RewardRequest(
                member_id=member.id,
                member_name=member.name,
                reward_id=reward.id,
                reward_title=reward.title,
                cost=reward.cost,
                status=RequestStatus.PENDING,
            )
            self.db.add(request)
            new_balance = self.ledger.post(
                member,
                -reward.cost,
                f'Requested "{reward.title}" - awaiting approval',
                log_type=LogType.INFO,
            )
            self.db.flush()
            logger.info(f"Member {member.id} requested reward {reward.id} (request {request.id}), points held")
            return RedemptionResult(
                settled=False,
                requires_approval=True,
                new_balance=new_balance,
                request_id=request.id,
                event=NotificationEvent(
                    kind=EventKind.REWARD_REQUESTED,
                    member_name=member.name,
                    title=reward.title,
                    amount=reward.cost,
                    new_balance=new_balance,
                ),
            )

    def process_request(self, *, request_id: str, approve: bool) -> ProcessResult:
        request = self.db.get(RewardRequest, request_id)
        if request is None:
            raise NotFound("Reward request", request_id)
        member_id = request.member_id

        with self.locks.hold(member_id), transaction(self.db):
            request = self.db.get(RewardRequest, request_id, populate_existing=True, with_for_update=True)
            if request is None:
                raise NotFound("Reward request", request_id)
            if request.status != RequestStatus.PENDING:
                logger.warning(f"Reward request {request.id} already {request.status}")
                raise AlreadyProcessed(request.id, request.status.value)

            member = self.ledger.load_member(member_id)
            if approve:
                request.status = RequestStatus.APPROVED
                record_activity(
                    self.db,
                    action=f'Approved: redemption of "{request.reward_title}"',
                    log_type=LogType.SUCCESS,
                    member=member,
                )
                new_balance = member.points
                kind = EventKind.REQUEST_APPROVED
            else:
                request.status = RequestStatus.DENIED
                new_balance = self.ledger.post(
                    member,
                    request.cost,
                    f'Denied: redemption of "{request.reward_title}", points refunded',
                    log_type=LogType.WARNING,
                )
                kind = EventKind.REQUEST_DENIED
            request.processed_at = utcnow()

            logger.info(f"Reward request {request.id} {request.status}, member {member.id} balance {new_balance}")
            return ProcessResult(
                request=request,
                approved=approve,
                new_balance=new_balance,
                event=NotificationEvent(
                    kind=kind,
                    member_name=member.name,
                    title=request.reward_title,
                    amount=request.cost,
                    new_balance=new_balance,
                ),
            )
