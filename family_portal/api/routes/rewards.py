from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from ...models.member import Member
from ...schemas.reward import (
    ProcessIn,
    ProcessOut,
    RedeemIn,
    RedeemOut,
    RewardCreate,
    RewardOut,
    RewardRequestOut,
    RewardUpdate,
)
from ...services.errors import InvalidInput
from ...services.notifications import NotificationDispatcher
from ...services.redemption import RewardRedemptionWorkflow
from ...services.reward_service import (
    create_reward,
    delete_reward,
    list_pending_requests,
    list_rewards,
    update_reward,
)
from ..deps import get_db, get_dispatcher, get_redemption_workflow, require_adult

router = APIRouter()


@router.get("", response_model=list[RewardOut])
def catalog(db: Session = Depends(get_db)):
    return list_rewards(db)


@router.post("", response_model=RewardOut, status_code=status.HTTP_201_CREATED)
def add_reward(payload: RewardCreate, db: Session = Depends(get_db)):
    return create_reward(
        db,
        title=payload.title,
        description=payload.description,
        cost=payload.cost,
        icon=payload.icon,
        category=payload.category,
    )


@router.get("/requests/pending", response_model=list[RewardRequestOut])
def pending_requests(db: Session = Depends(get_db)):
    return list_pending_requests(db)


@router.post("/requests/{request_id}/process", response_model=ProcessOut)
def process_request(
    request_id: str,
    payload: ProcessIn,
    background: BackgroundTasks,
    workflow: RewardRedemptionWorkflow = Depends(get_redemption_workflow),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    _: Member = Depends(require_adult),
):
    if payload.approve is None:
        raise InvalidInput("Approve status is required")
    result = workflow.process_request(request_id=request_id, approve=payload.approve)
    background.add_task(dispatcher.dispatch, result.event)
    return ProcessOut(approved=result.approved, status=result.request.status, new_points=result.new_balance)


@router.put("/{reward_id}", response_model=RewardOut)
def edit_reward(reward_id: str, payload: RewardUpdate, db: Session = Depends(get_db)):
    return update_reward(
        db,
        reward_id=reward_id,
        title=payload.title,
        description=payload.description,
        cost=payload.cost,
        icon=payload.icon,
        category=payload.category,
    )


@router.delete("/{reward_id}")
def remove_reward(reward_id: str, db: Session = Depends(get_db)):
    delete_reward(db, reward_id)
    return {"success": True}


@router.post("/{reward_id}/redeem", response_model=RedeemOut)
def redeem(
    reward_id: str,
    payload: RedeemIn,
    background: BackgroundTasks,
    workflow: RewardRedemptionWorkflow = Depends(get_redemption_workflow),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    result = workflow.redeem(member_id=payload.member_id, reward_id=reward_id)
    background.add_task(dispatcher.dispatch, result.event)
    return RedeemOut(
        settled=result.settled,
        requires_approval=result.requires_approval,
        request_id=result.request_id,
        new_points=result.new_balance,
    )
