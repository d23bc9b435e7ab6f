from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from ...core.clock import Clock, is_weekday, is_weekend
from ...models.member import Member
from ...schemas.task import ResetOut, TaskCreate, TaskOut, TaskToggle, TaskUpdate, ToggleOut
from ...services.notifications import NotificationDispatcher
from ...services.recurrence import RecurrenceResetScheduler
from ...services.task_completion import TaskCompletionEngine
from ...services.task_service import (
    create_task,
    delete_task,
    list_tasks_for_member,
    update_task,
)
from ..deps import (
    get_clock,
    get_db,
    get_dispatcher,
    get_reset_scheduler,
    get_task_engine,
    require_adult,
)

router = APIRouter()


@router.get("/member/{member_id}", response_model=list[TaskOut])
def member_tasks(member_id: str, db: Session = Depends(get_db)):
    return list_tasks_for_member(db, member_id=member_id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def add_task(payload: TaskCreate, db: Session = Depends(get_db)):
    schedule = payload.schedule
    return create_task(
        db,
        member_id=payload.member_id,
        title=payload.title,
        points=payload.points,
        category=payload.category,
        recurrence=payload.recurrence,
        schedule_start=schedule.start if schedule else None,
        schedule_end=schedule.end if schedule else None,
    )


@router.put("/{task_id}", response_model=TaskOut)
def edit_task(task_id: str, payload: TaskUpdate, db: Session = Depends(get_db)):
    schedule = payload.schedule
    return update_task(
        db,
        task_id=task_id,
        title=payload.title,
        points=payload.points,
        category=payload.category,
        recurrence=payload.recurrence,
        schedule_start=schedule.start if schedule else None,
        schedule_end=schedule.end if schedule else None,
    )


@router.delete("/{task_id}")
def remove_task(task_id: str, db: Session = Depends(get_db)):
    delete_task(db, task_id)
    return {"success": True}


# ------------------------------------------------------------------------
# Check / uncheck a task
# ------------------------------------------------------------------------
@router.post("/{task_id}/toggle", response_model=ToggleOut)
def toggle_task(
    task_id: str,
    payload: TaskToggle,
    background: BackgroundTasks,
    engine: TaskCompletionEngine = Depends(get_task_engine),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    result = engine.toggle(member_id=payload.member_id, task_id=task_id)
    background.add_task(dispatcher.dispatch, result.event)
    return ToggleOut(
        completed=result.completed,
        new_points=result.new_balance,
        current_streak=result.current_streak,
        longest_streak=result.longest_streak,
    )


# ------------------------------------------------------------------------
# Reopen recurring tasks (normally run once a day by the scheduler script)
# ------------------------------------------------------------------------
@router.post("/reset-recurring", response_model=ResetOut)
def reset_recurring(
    scheduler: RecurrenceResetScheduler = Depends(get_reset_scheduler),
    clock: Clock = Depends(get_clock),
    _: Member = Depends(require_adult),
):
    today = clock.today()
    return ResetOut(reset=scheduler.run_daily_reset(today, is_weekday(today), is_weekend(today)))
