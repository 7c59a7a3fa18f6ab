"""Project schemas for API request/response."""

from datetime import datetime
from typing import Any

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.devlog.models.enums import ProjectStatus

MAX_NAME_LENGTH = 200
MAX_TEXT_LENGTH = 5000


def _strip_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Project name cannot be empty or whitespace only")
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    is_public: bool = False
    details: str = Field(default="", max_length=MAX_TEXT_LENGTH)
    estimated_time: str = Field(default="", max_length=200)
    available_time: str = Field(default="", max_length=200)
    timeline: str = Field(default="", max_length=MAX_TEXT_LENGTH)
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_name(v)


class ProjectPatch(BaseModel):
    """Partial update of a project.

    Only the fields listed here may change; unknown fields are rejected
    instead of being persisted. Identity, ownership, slug and timestamps are
    managed by the service.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    name: str | None = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    is_public: bool | None = None
    details: str | None = Field(default=None, max_length=MAX_TEXT_LENGTH)
    estimated_time: str | None = Field(default=None, max_length=200)
    available_time: str | None = Field(default=None, max_length=200)
    timeline: str | None = Field(default=None, max_length=MAX_TEXT_LENGTH)
    status: ProjectStatus | None = None
    archived: bool | None = None
    archive_reason: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = sorted(key for key, value in data.items() if value is None)
            if nulls:
                raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return data

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _strip_name(v) if v is not None else v

    def to_changes(self) -> dict[str, Any]:
        """The explicitly set fields, keyed by their stored (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ArchiveRequest(BaseModel):
    reason: str = Field(default="", max_length=1000)


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: str
    name: str
    slug: str
    owner: str
    owner_account_id: str
    is_public: bool
    details: str
    estimated_time: str
    available_time: str
    timeline: str
    status: ProjectStatus
    archived: bool
    archive_reason: str
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
