from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.activity_log import LogType
from ..models.task import Recurrence, Task, TaskCategory
from .activity_log import record_activity
from .errors import NotFound
from .member_service import get_member

def get_task(db: Session, task_id: str) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise NotFound("Task", task_id)
    return task

def create_task(
    db: Session, *,
    member_id: str,
    title: str,
    points: int,
    category: TaskCategory,
    recurrence: Recurrence = Recurrence.NONE,
    schedule_start: str | None = None,
    schedule_end: str | None = None,
) -> Task:
    member = get_member(db, member_id)
    t = Task(
        member_id=member.id,
        title=title,
        points=points,
        category=category,
        recurrence=recurrence,
        schedule_start=schedule_start,
        schedule_end=schedule_end,
    )
    db.add(t)
    record_activity(db, action=f'New task created: "{title}"', log_type=LogType.INFO, member=member)
    db.commit()
    db.refresh(t)
    return t

def list_tasks_for_member(db: Session, *, member_id: str) -> list[Task]:
    get_member(db, member_id)
    stmt = select(Task).where(Task.member_id == member_id).order_by(Task.created_at.desc())
    return list(db.execute(stmt).scalars())

def update_task(
    db: Session, *,
    task_id: str,
    title: str | None = None,
    points: int | None = None,
    category: TaskCategory | None = None,
    recurrence: Recurrence | None = None,
    schedule_start: str | None = None,
    schedule_end: str | None = None,
) -> Task:
    # completion state only changes through the toggle engine and the daily reset
    task = get_task(db, task_id)
    if title is not None:
        task.title = title
    if points is not None:
        task.points = points
    if category is not None:
        task.category = category
    if recurrence is not None:
        task.recurrence = recurrence
    if schedule_start is not None:
        task.schedule_start = schedule_start
    if schedule_end is not None:
        task.schedule_end = schedule_end
    db.commit()
    db.refresh(task)
    return task

def delete_task(db: Session, task_id: str) -> None:
    task = get_task(db, task_id)
    db.delete(task)
    db.commit()
