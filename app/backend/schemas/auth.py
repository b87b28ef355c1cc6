from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=100)


class LoginRequest(_CamelModel):
    username: str
    password: str


class RegisterResponse(_CamelModel):
    message: str
    user_id: int


class LoginResponse(_CamelModel):
    token: str
    username: str
    expires_at: datetime
