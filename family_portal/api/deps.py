from functools import lru_cache
from typing import Generator, Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
import jwt
from ..core.clock import Clock
from ..core.config import settings
from ..db.locks import MemberLocks
from ..db.store import Store
from ..models.member import Member, MemberRole
from ..services.ledger import PointsLedger
from ..services.notifications import NotificationDispatcher
from ..services.recurrence import RecurrenceResetScheduler
from ..services.redemption import RewardRedemptionWorkflow
from ..services.security import decode_access_token
from ..services.streaks import StreakTracker
from ..services.task_completion import TaskCompletionEngine
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/pin")

def get_store(request: Request) -> Store:
    return request.app.state.store

def get_db(store: Store = Depends(get_store)) -> Generator[Session, None, None]:
    db = store.session()
    try:
        yield db
    finally:
        db.close()

def get_locks(store: Store = Depends(get_store)) -> MemberLocks:
    return store.locks

@lru_cache
def get_clock() -> Clock:
    return Clock(settings.TIMEZONE)

@lru_cache
def get_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher.from_settings(settings)

def get_ledger(db: Session = Depends(get_db), locks: MemberLocks = Depends(get_locks)) -> PointsLedger:
    return PointsLedger(db, locks)

def get_task_engine(
    db: Session = Depends(get_db),
    locks: MemberLocks = Depends(get_locks),
    ledger: PointsLedger = Depends(get_ledger),
    clock: Clock = Depends(get_clock),
) -> TaskCompletionEngine:
    return TaskCompletionEngine(db, locks, ledger, StreakTracker(), clock)

def get_redemption_workflow(
    db: Session = Depends(get_db),
    locks: MemberLocks = Depends(get_locks),
    ledger: PointsLedger = Depends(get_ledger),
) -> RewardRedemptionWorkflow:
    return RewardRedemptionWorkflow(db, locks, ledger, approval_threshold=settings.REWARD_APPROVAL_THRESHOLD)

def get_reset_scheduler(
    db: Session = Depends(get_db),
    locks: MemberLocks = Depends(get_locks),
    clock: Clock = Depends(get_clock),
) -> RecurrenceResetScheduler:
    return RecurrenceResetScheduler(db, locks, tz=clock.tz)

def get_current_member(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Member:
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    member_id: Optional[str] = payload.get("sub")
    if not member_id:
        raise HTTPException(status_code=401, detail="Invalid token payload")
    member = db.get(Member, member_id)
    if not member:
        raise HTTPException(status_code=401, detail="Unknown member")
    return member

def require_adult(current: Member = Depends(get_current_member)) -> Member:
    if current.role != MemberRole.ADULT:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only adults can do this")
    return current
