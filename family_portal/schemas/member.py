from datetime import date
from pydantic import BaseModel, Field
from ..models.member import MemberRole
from .common import ORMModel
from .task import TaskOut

PIN = r"^\d{4,8}$"

class MemberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    pin: str = Field(pattern=PIN)
    role: MemberRole = MemberRole.CHILD
    avatar: str | None = None
    birthday: date | None = None
    points: int = Field(default=0, ge=0)
class MemberUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=128)
    pin: str | None = Field(default=None, pattern=PIN)
    role: MemberRole | None = None
    avatar: str | None = None
    birthday: date | None = None
class MemberOut(ORMModel):
    id: str
    name: str
    avatar: str | None = None
    role: MemberRole
    birthday: date | None = None
    points: int
    current_streak: int
    longest_streak: int
    last_streak_date: date | None = None
class MemberDetailOut(MemberOut):
    tasks: list[TaskOut] = []
class PointsAdjust(BaseModel):
    # optional so a missing amount is reported as a business error, not a schema error
    amount: int | None = None
    reason: str | None = None
class PointsOut(BaseModel):
    new_points: int
