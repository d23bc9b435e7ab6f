from datetime import datetime
from pydantic import BaseModel
from ..models.activity_log import LogType
from .common import ORMModel
class ActivityLogOut(ORMModel):
    id: str
    member_id: str | None
    member_name: str | None
    action: str
    type: LogType
    created_at: datetime

class ActivityLogCreate(BaseModel):
    member_id: str | None = None
    action: str | None = None
    type: LogType = LogType.INFO
