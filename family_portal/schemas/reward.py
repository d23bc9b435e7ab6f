from pydantic import BaseModel, Field
from datetime import datetime
from ..models.reward import RequestStatus, RewardCategory
from .common import ORMModel
class RewardCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    cost: int = Field(ge=0)
    icon: str = "🎁"
    category: RewardCategory = RewardCategory.DIGITAL
class RewardUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    cost: int | None = Field(default=None, ge=0)
    icon: str | None = None
    category: RewardCategory | None = None
class RewardOut(ORMModel):
    id: str
    title: str
    description: str
    cost: int
    icon: str
    category: RewardCategory
class RedeemIn(BaseModel):
    member_id: str
class RedeemOut(BaseModel):
    settled: bool
    requires_approval: bool
    request_id: str | None = None
    new_points: int
class RewardRequestOut(ORMModel):
    id: str
    member_id: str
    member_name: str
    reward_id: str | None
    reward_title: str
    cost: int
    status: RequestStatus
    created_at: datetime
    processed_at: datetime | None = None
class ProcessIn(BaseModel):
    approve: bool | None = None
class ProcessOut(BaseModel):
    approved: bool
    status: RequestStatus
    new_points: int
