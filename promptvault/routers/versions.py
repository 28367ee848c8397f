"""Version history endpoints — list, inspect, compare, restore."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.database import get_db
from promptvault.schemas.prompt import PromptResponse
from promptvault.schemas.version import RestoreResponse, VersionComparison, VersionResponse
from promptvault.services import version_service
from promptvault.services.exceptions import NotFound

router = APIRouter()


def _not_found(exc: NotFound) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{exc.kind} not found")


@router.get("/{prompt_id}/versions/", response_model=list[VersionResponse])
async def list_versions(prompt_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await version_service.list_versions(db, prompt_id)
    except NotFound as exc:
        raise _not_found(exc)


@router.get("/{prompt_id}/versions/compare", response_model=VersionComparison)
async def compare_versions(
    prompt_id: str,
    old: str = Query(..., description="Version id to diff from"),
    new: str = Query(..., description="Version id to diff to"),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await version_service.compare_versions(db, prompt_id, old, new)
    except NotFound as exc:
        raise _not_found(exc)


@router.get("/{prompt_id}/versions/{version_id}", response_model=VersionResponse)
async def get_version(prompt_id: str, version_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await version_service.get_version(db, prompt_id, version_id)
    except NotFound as exc:
        raise _not_found(exc)


@router.post("/{prompt_id}/versions/{version_id}/restore", response_model=RestoreResponse)
async def restore_version(prompt_id: str, version_id: str, db: AsyncSession = Depends(get_db)):
    try:
        prompt, target = await version_service.restore(db, prompt_id, version_id)
    except NotFound as exc:
        raise _not_found(exc)
    return RestoreResponse(
        prompt=PromptResponse.model_validate(prompt),
        restored_version_number=target.version_number,
        message=f"Restored to version {target.version_number}",
    )
