from sqlalchemy.orm import Session
from sqlalchemy import select
from ..models.reward import Reward, RewardCategory, RewardRequest, RequestStatus
from .errors import NotFound

def create_reward(
    db: Session, *,
    title: str,
    cost: int,
    description: str = "",
    icon: str = "🎁",
    category: RewardCategory = RewardCategory.DIGITAL,
) -> Reward:
    r = Reward(title=title, description=description, cost=cost, icon=icon, category=category)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r

def get_reward(db: Session, reward_id: str) -> Reward:
    r = db.get(Reward, reward_id)
    if not r:
        raise NotFound("Reward", reward_id)
    return r

def list_rewards(db: Session) -> list[Reward]:
    return list(db.execute(select(Reward).order_by(Reward.cost.asc())).scalars())

def update_reward(
    db: Session, *,
    reward_id: str,
    title: str | None = None,
    description: str | None = None,
    cost: int | None = None,
    icon: str | None = None,
    category: RewardCategory | None = None,
) -> Reward:
    # pending requests keep the title and cost they were created with
    r = get_reward(db, reward_id)
    if title is not None:
        r.title = title
    if description is not None:
        r.description = description
    if cost is not None:
        r.cost = cost
    if icon is not None:
        r.icon = icon
    if category is not None:
        r.category = category
    db.commit()
    db.refresh(r)
    return r

def delete_reward(db: Session, reward_id: str) -> None:
    r = get_reward(db, reward_id)
    db.delete(r)
    db.commit()

def list_pending_requests(db: Session) -> list[RewardRequest]:
    stmt = (
        select(RewardRequest)
        .where(RewardRequest.status == RequestStatus.PENDING)
        .order_by(RewardRequest.created_at.desc())
    )
    return list(db.execute(stmt).scalars())

def list_requests_for_member(db: Session, *, member_id: str) -> list[RewardRequest]:
    stmt = (
        select(RewardRequest)
        .where(RewardRequest.member_id == member_id)
        .order_by(RewardRequest.created_at.desc())
    )
    return list(db.execute(stmt).scalars())
