"""Vault export/import endpoints."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.config import settings
from promptvault.database import get_db
from promptvault.schemas.transfer import ImportRequest, ImportResult
from promptvault.services import transfer_service

router = APIRouter()


@router.get("/export")
async def export_prompts(
    format: str = Query("json", pattern=r"^(json|markdown)$"),
    vault_id: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    vault = vault_id or settings.default_vault_id
    document = await transfer_service.export_vault(db, vault)
    stamp = document.exported_at.strftime("%Y%m%d%H%M%S")

    if format == "markdown":
        return PlainTextResponse(
            transfer_service.export_markdown(document),
            media_type="text/markdown",
            headers={"Content-Disposition": f'attachment; filename="promptvault-{stamp}.md"'},
        )
    return JSONResponse(
        document.model_dump(mode="json"),
        headers={"Content-Disposition": f'attachment; filename="promptvault-{stamp}.json"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_prompts(body: ImportRequest, db: AsyncSession = Depends(get_db)):
    return await transfer_service.import_prompts(
        db,
        vault_id=body.vault_id or settings.default_vault_id,
        data=body.data,
        conflict_resolution=body.conflict_resolution,
    )
