# app/backend/routers/task.py
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.backend.dependencies.auth import get_current_user_id
from app.backend.schemas.task import TaskCreate, TaskOut, TaskUpdate
from app.backend.services import task_service
from app.db.session import get_session

router = APIRouter(prefix="/api/task", tags=["Tasks"])


@router.get("", response_model=list[TaskOut])
def get_tasks(
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return task_service.list_tasks(db, user_id)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    return task_service.get_task(db, user_id, task_id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreate,
    response: Response,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    task = task_service.create_task(
        db,
        user_id,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
    )
    response.headers["Location"] = f"{router.prefix}/{task.id}"
    return task


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_task(
    task_id: int,
    body: TaskUpdate,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    task_service.update_task(
        db,
        user_id,
        task_id,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
        is_completed=body.is_completed,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_task(
    task_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
):
    task_service.delete_task(db, user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
