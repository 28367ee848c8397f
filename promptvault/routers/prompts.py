"""Prompt CRUD + render/validate endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.database import get_db
from promptvault.schemas.prompt import (
    PromptCreate,
    PromptDetailResponse,
    PromptResponse,
    PromptUpdate,
)
from promptvault.schemas.variables import (
    RenderRequest,
    RenderResponse,
    VariablesResponse,
    VariableValidation,
)
from promptvault.services import prompt_service, variable_service, version_service

router = APIRouter()


async def _require_prompt(db: AsyncSession, prompt_id: str):
    prompt = await prompt_service.get_prompt(db, prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt


@router.get("/", response_model=list[PromptResponse])
async def list_prompts(
    vault_id: str | None = None,
    search: str | None = None,
    sort_by: str = Query("updated_at", pattern=r"^(updated_at|created_at)$"),
    tag_id: list[str] | None = Query(None, description="Keep prompts carrying any of these tags"),
    db: AsyncSession = Depends(get_db),
):
    return await prompt_service.list_prompts(
        db, vault_id=vault_id, search=search, sort_by=sort_by, tag_ids=tag_id
    )


@router.post("/", response_model=PromptResponse, status_code=201)
async def create_prompt(data: PromptCreate, db: AsyncSession = Depends(get_db)):
    return await prompt_service.create_prompt(db, data)


@router.get("/{prompt_id}", response_model=PromptDetailResponse)
async def get_prompt(prompt_id: str, db: AsyncSession = Depends(get_db)):
    prompt = await _require_prompt(db, prompt_id)
    resp = PromptDetailResponse.model_validate(prompt)
    resp.version_count = await version_service.count_versions(db, prompt_id)
    resp.variables = variable_service.extract_variables(prompt.content)
    return resp


@router.patch("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: str, data: PromptUpdate, db: AsyncSession = Depends(get_db)
):
    prompt = await prompt_service.update_prompt(db, prompt_id, data)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt


@router.delete("/{prompt_id}", status_code=204)
async def delete_prompt(prompt_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await prompt_service.delete_prompt(db, prompt_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Prompt not found")


@router.get("/{prompt_id}/variables", response_model=VariablesResponse)
async def get_variables(prompt_id: str, db: AsyncSession = Depends(get_db)):
    prompt = await _require_prompt(db, prompt_id)
    return VariablesResponse(
        prompt_id=prompt_id,
        fields=variable_service.variable_schema(prompt.content),
        positions=variable_service.variable_positions(prompt.content),
        occurrences=variable_service.count_variable_occurrences(prompt.content),
    )


@router.post("/{prompt_id}/render", response_model=RenderResponse)
async def render_prompt(
    prompt_id: str, body: RenderRequest, db: AsyncSession = Depends(get_db)
):
    """Fill in variables. Unfilled ones stay as {{name}}; see ``validation``."""
    prompt = await _require_prompt(db, prompt_id)
    return RenderResponse(
        prompt_id=prompt_id,
        rendered=variable_service.resolve_template(prompt.content, body.values),
        validation=variable_service.validate_variables(prompt.content, body.values),
    )


@router.post("/{prompt_id}/validate", response_model=VariableValidation)
async def validate_prompt(
    prompt_id: str, body: RenderRequest, db: AsyncSession = Depends(get_db)
):
    prompt = await _require_prompt(db, prompt_id)
    return variable_service.validate_variables(prompt.content, body.values)
