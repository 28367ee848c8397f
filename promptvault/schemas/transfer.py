"""Import/export document schemas."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

EXPORT_FORMAT_VERSION = "1.0"


class ExportTag(BaseModel):
    id: str
    name: str
    color: str

    model_config = {"from_attributes": True}


class ExportPrompt(BaseModel):
    id: str
    title: str
    description: str
    content: str
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("tags", mode="before")
    @classmethod
    def tag_names(cls, v):
        # ORM rows carry Tag objects; the document only names them
        return [getattr(t, "name", t) for t in v]


class ExportVault(BaseModel):
    name: str


class ExportDocument(BaseModel):
    version: str = EXPORT_FORMAT_VERSION
    exported_at: datetime
    vault: ExportVault
    tags: list[ExportTag] = []
    prompts: list[ExportPrompt]


class ImportPrompt(BaseModel):
    # Title/content may be empty here; such entries are skipped and reported
    id: str | None = None
    title: str = ""
    description: str | None = ""
    content: str = ""
    tags: list[str] = []  # tag names, created in the vault when missing


class ImportTag(BaseModel):
    name: str
    color: str | None = None


class ImportData(BaseModel):
    version: str | None = None
    prompts: list[ImportPrompt]
    tags: list[ImportTag] = []


class ConflictResolution(StrEnum):
    """What to do when an imported title already exists in the vault."""

    SKIP = "skip"
    OVERWRITE = "overwrite"
    DUPLICATE = "duplicate"


class ImportRequest(BaseModel):
    data: ImportData
    conflict_resolution: ConflictResolution = ConflictResolution.SKIP
    vault_id: str | None = None


class ImportResult(BaseModel):
    imported: int = 0
    skipped: int = 0
    overwritten: int = 0
    duplicated: int = 0
    errors: list[str] = Field(default_factory=list)
