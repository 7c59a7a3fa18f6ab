from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.devlog.core.security import normalize_username, validate_username_format
from src.devlog.schemas.project import ProjectRead


class AccountRead(BaseModel):
    id: str
    email: str
    username: str
    display_name: str
    created_at: datetime | None

    model_config = {"from_attributes": True}


class PublicProfileRead(BaseModel):
    """What anyone may see of an account: no email."""

    username: str
    display_name: str
    created_at: datetime | None
    projects: list[ProjectRead]


class UsernameAvailability(BaseModel):
    username: str
    available: bool


class UsernameField(BaseModel):
    username: str = Field(min_length=1, max_length=64)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return validate_username_format(normalize_username(v))
