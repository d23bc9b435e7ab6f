from pydantic import BaseModel, Field
from datetime import datetime
from ..models.task import Recurrence, TaskCategory
from .common import ORMModel

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"

class ScheduleWindow(BaseModel):
    start: str | None = Field(default=None, pattern=HHMM)
    end: str | None = Field(default=None, pattern=HHMM)
class TaskCreate(BaseModel):
    member_id: str
    title: str = Field(min_length=1, max_length=200)
    points: int = Field(ge=0)
    category: TaskCategory
    recurrence: Recurrence = Recurrence.NONE
    schedule: ScheduleWindow | None = None
class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    points: int | None = Field(default=None, ge=0)
    category: TaskCategory | None = None
    recurrence: Recurrence | None = None
    schedule: ScheduleWindow | None = None
class TaskOut(ORMModel):
    id: str
    member_id: str
    title: str
    points: int
    completed: bool
    completed_at: datetime | None = None
    category: TaskCategory
    recurrence: Recurrence
    schedule_start: str | None = None
    schedule_end: str | None = None
class TaskToggle(BaseModel):
    member_id: str
class ToggleOut(BaseModel):
    completed: bool
    new_points: int
    current_streak: int
    longest_streak: int
class ResetOut(BaseModel):
    reset: int
