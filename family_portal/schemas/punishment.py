from pydantic import BaseModel, Field
from datetime import datetime
from ..models.punishment import PunishmentType
from .common import ORMModel
class PunishmentCreate(BaseModel):
    type: PunishmentType
    reason: str = ""
    duration: int | None = Field(default=None, gt=0)
    amount: int | None = Field(default=None, ge=0)
class PunishmentOut(ORMModel):
    id: str
    member_id: str
    type: PunishmentType
    duration: int | None = None
    points: int | None = None
    reason: str
    created_at: datetime
class PunishmentApplied(BaseModel):
    punishment: PunishmentOut
    new_points: int
