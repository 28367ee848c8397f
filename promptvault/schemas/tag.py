"""Tag request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from promptvault.models.tag import DEFAULT_TAG_COLOR


class TagCreate(BaseModel):
    name: str
    color: str = DEFAULT_TAG_COLOR
    vault_id: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Tag name is required")
        return v.strip()


class TagUpdate(BaseModel):
    name: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Tag name cannot be empty")
        return v.strip()


class TagResponse(BaseModel):
    id: str
    vault_id: str
    name: str
    color: str
    created_at: datetime

    model_config = {"from_attributes": True}
