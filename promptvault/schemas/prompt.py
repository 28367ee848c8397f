"""Prompt request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from promptvault.schemas.tag import TagResponse


class PromptCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    content: str = Field(..., min_length=1)  # template body, may hold {{variables}}
    vault_id: str | None = None  # falls back to settings.default_vault_id
    tag_ids: list[str] = []  # ids outside the vault are ignored

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v


class PromptUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    content: str | None = None
    tag_ids: list[str] | None = None  # replaces the assignment; not versioned

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class PromptResponse(BaseModel):
    id: str
    vault_id: str
    title: str
    description: str
    content: str
    created_at: datetime
    updated_at: datetime
    tags: list[TagResponse] = []

    model_config = {"from_attributes": True}


class PromptDetailResponse(PromptResponse):
    version_count: int = 0
    variables: list[str] = []
