"""Version history request/response schemas."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel

from promptvault.schemas.prompt import PromptResponse


class VersionResponse(BaseModel):
    id: str
    prompt_id: str
    title: str
    description: str
    content: str
    version_number: int
    created_at: datetime

    model_config = {"from_attributes": True}


class DiffKind(StrEnum):
    SAME = "same"
    ADDED = "added"
    REMOVED = "removed"


class DiffLine(BaseModel):
    kind: DiffKind
    line: str


class DiffSummary(BaseModel):
    added: int = 0
    removed: int = 0
    unchanged: int = 0


class VersionComparison(BaseModel):
    prompt_id: str
    old: VersionResponse
    new: VersionResponse
    lines: list[DiffLine]
    summary: DiffSummary


class RestoreResponse(BaseModel):
    prompt: PromptResponse
    restored_version_number: int
    message: str
