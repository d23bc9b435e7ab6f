"""Reopen completed recurring tasks. Meant to run from cron shortly after midnight."""
import logging

from family_portal.core.clock import Clock, is_weekday, is_weekend
from family_portal.core.config import settings
from family_portal.core.logging import setup_logging
from family_portal.db.store import Store
from family_portal.services.recurrence import RecurrenceResetScheduler

logger = logging.getLogger("daily_reset")


def main() -> int:
    setup_logging(settings.LOG_LEVEL)
    clock = Clock(settings.TIMEZONE)
    today = clock.today()
    store = Store(settings.DATABASE_URL).open()
    db = store.session()
    try:
        scheduler = RecurrenceResetScheduler(db, store.locks, tz=clock.tz)
        count = scheduler.run_daily_reset(today, is_weekday(today), is_weekend(today))
    finally:
        db.close()
        store.close()
    logger.info(f"{count} tasks reset for {today.isoformat()}")
    return count


if __name__ == "__main__":
    main()
