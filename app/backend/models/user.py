from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.backend.models._time import utcnow

if TYPE_CHECKING:
    from app.backend.models.task import TaskItem


class User(SQLModel, table=True):
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    # exact (case-sensitive) match is the uniqueness rule
    username: str = Field(max_length=50, index=True, unique=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    tasks: List["TaskItem"] = Relationship(back_populates="user", cascade_delete=True)
