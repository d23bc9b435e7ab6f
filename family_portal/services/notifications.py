"""Events handed to an outside notifier after points move.

The services only build ``NotificationEvent`` values. Delivery happens after
the transaction committed, and a failing notifier is logged and ignored.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum

from ..core.config import Settings

logger = logging.getLogger(__name__)


class EventKind(StrEnum):
    TASK_COMPLETED = "task_completed"
    TASK_UNCHECKED = "task_unchecked"
    REWARD_REDEEMED = "reward_redeemed"
    REWARD_REQUESTED = "reward_requested"
    REQUEST_APPROVED = "request_approved"
    REQUEST_DENIED = "request_denied"
    PUNISHMENT_APPLIED = "punishment_applied"


@dataclass(frozen=True)
class NotificationEvent:
    kind: EventKind
    member_name: str
    title: str
    amount: int
    new_balance: int


class Notifier(ABC):
    @abstractmethod
    def notify(self, event: NotificationEvent) -> None:
        """Deliver one event. Errors propagate to the dispatcher."""


class LoggingNotifier(Notifier):
    def notify(self, event: NotificationEvent) -> None:
        logger.info(
            f"[{event.kind}] {event.member_name}: {event.title} "
            f"({event.amount} points, balance {event.new_balance})"
        )


class NotificationDispatcher:
    def __init__(self, notifier: Notifier, *, enabled: set[EventKind] | None = None):
        self.notifier = notifier
        self.enabled = set(EventKind) if enabled is None else set(enabled)

    @classmethod
    def from_settings(cls, settings: Settings, notifier: Notifier | None = None) -> "NotificationDispatcher":
        enabled: set[EventKind] = set()
        if settings.NOTIFY_TASK_COMPLETED:
            enabled |= {EventKind.TASK_COMPLETED, EventKind.TASK_UNCHECKED}
        if settings.NOTIFY_REWARD_REDEEMED:
            enabled |= {
                EventKind.REWARD_REDEEMED,
                EventKind.REWARD_REQUESTED,
                EventKind.REQUEST_APPROVED,
                EventKind.REQUEST_DENIED,
            }
        if settings.NOTIFY_PUNISHMENT_APPLIED:
            enabled.add(EventKind.PUNISHMENT_APPLIED)
        return cls(notifier or LoggingNotifier(), enabled=enabled)

    def dispatch(self, event: NotificationEvent | None) -> bool:
        if event is None or event.kind not in self.enabled:
            return False
        try:
            self.notifier.notify(event)
        except Exception as e:
            logger.warning(f"Notification {event.kind} for {event.member_name} not delivered: {e}", exc_info=True)
            return False
        return True
