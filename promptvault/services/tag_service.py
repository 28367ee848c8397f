"""Tag service — per-vault tags and their assignment to prompts."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.config import settings
from promptvault.models.tag import Tag
from promptvault.schemas.tag import TagCreate, TagUpdate
from promptvault.services.exceptions import DuplicateName
from promptvault.services.version_service import atomic

logger = logging.getLogger(__name__)


async def list_tags(db: AsyncSession, vault_id: str) -> list[Tag]:
    stmt = select(Tag).where(Tag.vault_id == vault_id).order_by(Tag.name)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_tag(db: AsyncSession, tag_id: str) -> Tag | None:
    return await db.get(Tag, tag_id)


async def find_by_name(db: AsyncSession, vault_id: str, name: str) -> Tag | None:
    stmt = select(Tag).where(Tag.vault_id == vault_id, Tag.name == name)
    return (await db.execute(stmt)).scalar_one_or_none()


async def resolve_tags(db: AsyncSession, vault_id: str, tag_ids: list[str]) -> list[Tag]:
    """The tags among ``tag_ids`` that belong to ``vault_id``; unknown ids are dropped."""
    if not tag_ids:
        return []
    stmt = select(Tag).where(Tag.vault_id == vault_id, Tag.id.in_(tag_ids))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_tag(db: AsyncSession, data: TagCreate) -> Tag:
    vault_id = data.vault_id or settings.default_vault_id
    if await find_by_name(db, vault_id, data.name):
        raise DuplicateName(data.name)

    tag = Tag(vault_id=vault_id, name=data.name, color=data.color)
    async with atomic(db):
        db.add(tag)
    await db.refresh(tag)
    logger.info("Created tag %r in vault %s", tag.name, vault_id)
    return tag


async def update_tag(db: AsyncSession, tag_id: str, data: TagUpdate) -> Tag | None:
    tag = await db.get(Tag, tag_id)
    if not tag:
        return None

    if data.name is not None and data.name != tag.name:
        if await find_by_name(db, tag.vault_id, data.name):
            raise DuplicateName(data.name)

    async with atomic(db):
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(tag, field, value)
    await db.refresh(tag)
    return tag


async def delete_tag(db: AsyncSession, tag_id: str) -> bool:
    tag = await db.get(Tag, tag_id)
    if not tag:
        return False

    # Assignments go with it (ON DELETE CASCADE on prompt_tags)
    async with atomic(db):
        await db.delete(tag)
    return True
