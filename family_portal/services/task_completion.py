import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..db.locks import MemberLocks
from ..db.session import transaction
from ..models.task import Task
from .errors import NotFound
from .ledger import PointsLedger
from .notifications import EventKind, NotificationEvent
from .streaks import StreakTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    completed: bool
    new_balance: int
    current_streak: int
    longest_streak: int
    event: NotificationEvent


class TaskCompletionEngine:
    """Checks and unchecks tasks, moving points and streaks along with them."""

    def __init__(
        self,
        db: Session,
        locks: MemberLocks,
        ledger: PointsLedger,
        streaks: StreakTracker,
        clock: Clock,
    ):
        self.db = db
        self.locks = locks
        self.ledger = ledger
        self.streaks = streaks
        self.clock = clock

    def toggle(self, *, member_id: str, task_id: str) -> ToggleResult:
        with self.locks.hold(member_id), transaction(self.db):
            member = self.ledger.load_member(member_id)
            task = self.db.get(Task, task_id, populate_existing=True)
            if task is None or task.member_id != member.id:
                raise NotFound("Task", task_id)

            if not task.completed:
                task.completed = True
                task.completed_at = self.clock.now()
                new_balance = self.ledger.post(member, task.points, f'Completed "{task.title}"')
                self.streaks.record_completion(member, self.clock.today())
                kind = EventKind.TASK_COMPLETED
            else:
                # the streak is left as is: there is no undo for a recorded day
                task.completed = False
                task.completed_at = None
                new_balance = self.ledger.post(member, -task.points, f'Unchecked "{task.title}"')
                kind = EventKind.TASK_UNCHECKED

            logger.info(f"Task {task.id} for member {member.id} -> completed={task.completed}, balance {new_balance}")
            return ToggleResult(
                completed=task.completed,
                new_balance=new_balance,
                current_streak=member.current_streak,
                longest_streak=member.longest_streak,
                event=NotificationEvent(
                    kind=kind,
                    member_name=member.name,
                    title=task.title,
                    amount=task.points,
                    new_balance=new_balance,
                ),
            )
