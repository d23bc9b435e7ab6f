import logging
from dataclasses import dataclass
from datetime import date, timedelta

from ..models.member import Member

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakState:
    current_streak: int
    longest_streak: int


class StreakTracker:
    """Counts consecutive calendar days with at least one completed task."""

    def record_completion(self, member: Member, today: date) -> StreakState:
        last = member.last_streak_date
        current = member.current_streak or 0

        if last == today:
            return StreakState(current, member.longest_streak or 0)

        if last is not None and last == today - timedelta(days=1):
            current += 1
        else:
            # first completion, a gap of two days or more, or a future date from clock skew
            current = 1

        member.current_streak = current
        member.longest_streak = max(member.longest_streak or 0, current)
        member.last_streak_date = today
        logger.debug(f"Streak for member {member.id}: {current} (longest {member.longest_streak})")
        return StreakState(member.current_streak, member.longest_streak)
