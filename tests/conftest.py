import os
from datetime import datetime, timedelta, timezone

# keep the app from resetting tasks against the real clock during tests
os.environ["FAMILY_PORTAL_RESET_ON_STARTUP"] = "false"
os.environ["FAMILY_PORTAL_LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from family_portal.api.deps import get_clock, get_dispatcher
from family_portal.core.clock import Clock
from family_portal.db.store import Store
from family_portal.main import create_app
from family_portal.models.member import MemberRole
from family_portal.models.task import Recurrence, TaskCategory
from family_portal.services.ledger import PointsLedger
from family_portal.services.member_service import create_member
from family_portal.services.notifications import NotificationDispatcher, Notifier
from family_portal.services.recurrence import RecurrenceResetScheduler
from family_portal.services.redemption import RewardRedemptionWorkflow
from family_portal.services.reward_service import create_reward
from family_portal.services.streaks import StreakTracker
from family_portal.services.task_completion import TaskCompletionEngine
from family_portal.services.task_service import create_task

# Wednesday
START = datetime(2024, 3, 6, 9, 0, tzinfo=timezone.utc)


class FixedClock(Clock):
    """Clock pinned to a moment that tests move by hand."""

    def __init__(self, moment: datetime, tz="UTC"):
        super().__init__(tz)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment += timedelta(**kwargs)


class RecordingNotifier(Notifier):
    def __init__(self):
        self.events = []

    def notify(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def store():
    s = Store("sqlite://", poolclass=StaticPool).open()
    yield s
    s.close()


@pytest.fixture
def db(store):
    session = store.session()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def ledger(db, store):
    return PointsLedger(db, store.locks)


@pytest.fixture
def engine(db, store, ledger, clock):
    return TaskCompletionEngine(db, store.locks, ledger, StreakTracker(), clock)


@pytest.fixture
def workflow(db, store, ledger):
    return RewardRedemptionWorkflow(db, store.locks, ledger, approval_threshold=1000)


@pytest.fixture
def scheduler(db, store, clock):
    return RecurrenceResetScheduler(db, store.locks, tz=clock.tz)


@pytest.fixture
def make_member(db):
    def _make(name="Ana", points=0, role=MemberRole.CHILD, pin="1234"):
        return create_member(db, name=name, pin=pin, role=role, points=points)
    return _make


@pytest.fixture
def make_task(db):
    def _make(member, title="Make the bed", points=50, recurrence=Recurrence.NONE, category=TaskCategory.CHORES):
        return create_task(
            db,
            member_id=member.id,
            title=title,
            points=points,
            category=category,
            recurrence=recurrence,
        )
    return _make


@pytest.fixture
def make_reward(db):
    def _make(title="Ice cream", cost=100):
        return create_reward(db, title=title, cost=cost)
    return _make


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(store, clock, notifier):
    application = create_app(store)
    application.dependency_overrides[get_clock] = lambda: clock
    application.dependency_overrides[get_dispatcher] = lambda: NotificationDispatcher(notifier)
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def adult_headers(client, make_member):
    adult = make_member(name="Mom", role=MemberRole.ADULT, pin="9999")
    resp = client.post("/auth/pin", json={"member_id": adult.id, "pin": "9999"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
