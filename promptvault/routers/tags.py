"""Tag CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.config import settings
from promptvault.database import get_db
from promptvault.schemas.tag import TagCreate, TagResponse, TagUpdate
from promptvault.services import tag_service
from promptvault.services.exceptions import DuplicateName

router = APIRouter()


@router.get("/", response_model=list[TagResponse])
async def list_tags(vault_id: str | None = None, db: AsyncSession = Depends(get_db)):
    return await tag_service.list_tags(db, vault_id or settings.default_vault_id)


@router.post("/", response_model=TagResponse, status_code=201)
async def create_tag(data: TagCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await tag_service.create_tag(db, data)
    except DuplicateName:
        raise HTTPException(status_code=409, detail="Tag already exists")


@router.patch("/{tag_id}", response_model=TagResponse)
async def update_tag(tag_id: str, data: TagUpdate, db: AsyncSession = Depends(get_db)):
    try:
        tag = await tag_service.update_tag(db, tag_id, data)
    except DuplicateName:
        raise HTTPException(status_code=409, detail="Tag already exists")
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")
    return tag


@router.delete("/{tag_id}", status_code=204)
async def delete_tag(tag_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await tag_service.delete_tag(db, tag_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Tag not found")
