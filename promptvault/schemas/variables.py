"""Variable engine result types and render/validate payloads."""

from pydantic import BaseModel


class VariableValidation(BaseModel):
    complete: bool
    missing: list[str]


class VariablePosition(BaseModel):
    name: str
    start: int  # offset of the opening "{{"
    end: int  # offset just past the closing "}}"
    line: int  # 1-based


class VariableField(BaseModel):
    """One input of a "fill in variables" form."""
    name: str
    label: str
    required: bool = True


class RenderRequest(BaseModel):
    values: dict[str, str] = {}


class RenderResponse(BaseModel):
    prompt_id: str
    rendered: str
    validation: VariableValidation


class VariablesResponse(BaseModel):
    prompt_id: str
    fields: list[VariableField]
    positions: list[VariablePosition]
    occurrences: int
