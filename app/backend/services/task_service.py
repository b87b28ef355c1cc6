"""
Task storage scoped by owner.

Every lookup filters on both the task id and the caller's user id in one
query, so a task owned by someone else is reported exactly like a task
that does not exist.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlmodel import Session, col, select

from app.backend.core.errors import NotFound
from app.backend.models._time import utcnow
from app.backend.models.task import TaskItem

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _not_found(task_id: int) -> NotFound:
    return NotFound(f"Task with ID {task_id} not found.")


def _owned(db: Session, user_id: int, task_id: int) -> TaskItem:
    stmt = select(TaskItem).where(TaskItem.id == task_id, TaskItem.user_id == user_id)
    task = db.exec(stmt).first()
    if task is None:
        raise _not_found(task_id)
    return task


def list_tasks(db: Session, user_id: int) -> list[TaskItem]:
    stmt = (
        select(TaskItem)
        .where(TaskItem.user_id == user_id)
        .order_by(col(TaskItem.created_at).desc(), col(TaskItem.id).desc())
    )
    return list(db.exec(stmt).all())


def get_task(db: Session, user_id: int, task_id: int) -> TaskItem:
    return _owned(db, user_id, task_id)


def create_task(
    db: Session,
    user_id: int,
    *,
    title: str,
    description: Optional[str] = None,
    due_date: Optional[datetime] = None,
    clock: Clock = utcnow,
) -> TaskItem:
    now = clock()
    task = TaskItem(
        title=title,
        description=description,
        due_date=due_date,
        is_completed=False,
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    log.info("Created task %s for user %s", task.id, user_id)
    return task


def update_task(
    db: Session,
    user_id: int,
    task_id: int,
    *,
    title: str,
    description: Optional[str] = None,
    due_date: Optional[datetime] = None,
    is_completed: bool = False,
    clock: Clock = utcnow,
) -> TaskItem:
    """Replace every mutable field; created_at is left alone."""
    task = _owned(db, user_id, task_id)

    task.title = title
    task.description = description
    task.due_date = due_date
    task.is_completed = is_completed
    task.updated_at = clock()

    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    task = _owned(db, user_id, task_id)
    db.delete(task)
    db.commit()
    log.info("Deleted task %s for user %s", task_id, user_id)
