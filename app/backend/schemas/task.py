from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.backend.models._time import to_naive_utc


class _TaskBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class TaskCreate(_TaskBody):
    pass


class TaskUpdate(_TaskBody):
    is_completed: bool = False


class TaskOut(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    is_completed: bool
    created_at: datetime
    updated_at: datetime
    user_id: int
