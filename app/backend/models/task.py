from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.backend.models._time import utcnow

if TYPE_CHECKING:
    from app.backend.models.user import User


class TaskItem(SQLModel, table=True):
    __tablename__ = "taskitem"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    is_completed: bool = False
    created_at: datetime = Field(default_factory=utcnow, index=True, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    user_id: int = Field(foreign_key="user.id", index=True, ondelete="CASCADE")

    user: Optional["User"] = Relationship(back_populates="tasks")
