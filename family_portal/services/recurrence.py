import logging
from datetime import date, tzinfo

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.clock import as_local_date
from ..db.locks import MemberLocks
from ..db.session import transaction
from ..models.task import Recurrence, Task

logger = logging.getLogger(__name__)

WEEKLY_RESET_DAYS = 7


class RecurrenceResetScheduler:
    """Marks completed recurring tasks incomplete again, once per calendar day.

    Points and streaks are untouched: a reset only reopens the task. Running it
    twice on the same day is harmless because reset tasks no longer match.
    """

    def __init__(self, db: Session, locks: MemberLocks, *, tz: tzinfo):
        self.db = db
        self.locks = locks
        self.tz = tz

    def should_reset(self, task: Task, *, today: date, is_weekday: bool, is_weekend: bool) -> bool:
        if not task.completed or task.recurrence == Recurrence.NONE:
            return False
        completed_on = as_local_date(task.completed_at, self.tz) if task.completed_at else None
        if completed_on is not None and completed_on >= today:
            return False

        if task.recurrence == Recurrence.DAILY:
            return True
        if task.recurrence == Recurrence.WEEKDAYS:
            return is_weekday
        if task.recurrence == Recurrence.WEEKENDS:
            return is_weekend
        if task.recurrence == Recurrence.WEEKLY:
            return completed_on is None or (today - completed_on).days >= WEEKLY_RESET_DAYS
        return False

    def run_daily_reset(self, today: date, is_weekday: bool, is_weekend: bool) -> int:
        stmt = select(Task.id, Task.member_id).where(
            Task.completed.is_(True),
            Task.recurrence != Recurrence.NONE,
        )
        candidates = self.db.execute(stmt).all()

        count = 0
        for task_id, member_id in candidates:
            # re-read under the member's lock so a concurrent toggle wins cleanly
            with self.locks.hold(member_id), transaction(self.db):
                task = self.db.get(Task, task_id, populate_existing=True, with_for_update=True)
                if task is None:
                    continue
                if not self.should_reset(task, today=today, is_weekday=is_weekday, is_weekend=is_weekend):
                    continue
                task.completed = False
                task.completed_at = None
                count += 1

        logger.info(f"Daily reset for {today.isoformat()}: {count} recurring tasks reopened")
        return count
