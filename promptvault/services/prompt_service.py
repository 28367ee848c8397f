"""Prompt service — CRUD over prompts, versioned through version_service."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.config import settings
from promptvault.models.prompt import Prompt, utcnow
from promptvault.models.tag import Tag
from promptvault.schemas.prompt import PromptCreate, PromptUpdate
from promptvault.services import tag_service, version_service
from promptvault.services.exceptions import NotFound
from promptvault.services.version_service import atomic, load_prompt

# Fields whose change is versioned
VERSIONED_FIELDS = ("title", "description", "content")


async def list_prompts(
    db: AsyncSession,
    vault_id: str | None = None,
    search: str | None = None,
    sort_by: str = "updated_at",
    tag_ids: list[str] | None = None,
) -> list[Prompt]:
    order = Prompt.created_at if sort_by == "created_at" else Prompt.updated_at
    # id breaks ties so equal timestamps still list in a stable order
    stmt = select(Prompt).order_by(order.desc(), Prompt.id)
    if vault_id:
        stmt = stmt.where(Prompt.vault_id == vault_id)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Prompt.title.ilike(pattern),
                Prompt.description.ilike(pattern),
                Prompt.content.ilike(pattern),
            )
        )
    if tag_ids:
        # Any of the given tags
        stmt = stmt.where(Prompt.tags.any(Tag.id.in_(tag_ids)))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_prompt(db: AsyncSession, prompt_id: str) -> Prompt | None:
    return await db.get(Prompt, prompt_id)


async def add_prompt(
    db: AsyncSession,
    vault_id: str,
    title: str,
    description: str,
    content: str,
    tags: list[Tag] | None = None,
) -> Prompt:
    """Insert a prompt and its first version. Caller commits."""
    now = utcnow()
    prompt = Prompt(
        vault_id=vault_id,
        title=title.strip(),
        description=description.strip(),
        content=content,
        tags=list(tags or []),
        created_at=now,
        updated_at=now,
    )
    db.add(prompt)
    await db.flush()
    await version_service.snapshot(db, prompt, initial=True)
    return prompt


async def apply_changes(
    db: AsyncSession,
    prompt_id: str,
    changes: dict[str, str],
    tags: list[Tag] | None = None,
) -> Prompt:
    """Snapshot the prompt, then apply ``changes`` and, if given, ``tags``. Caller commits.

    Only title/description/content are versioned: a call that only
    reassigns tags writes no snapshot. Raises NotFound if the prompt does
    not exist.
    """
    prompt = await version_service.lock_prompt(db, prompt_id)
    if changes:
        await version_service.snapshot(db, prompt)

    for field, value in changes.items():
        if field in ("title", "description"):
            value = value.strip()
        setattr(prompt, field, value)
    if tags is not None:
        prompt.tags = tags
    # Always a new value, so the UPDATE and its revision check are never skipped
    prompt.updated_at = utcnow()
    return prompt


async def create_prompt(db: AsyncSession, data: PromptCreate) -> Prompt:
    vault_id = data.vault_id or settings.default_vault_id
    async with atomic(db):
        prompt = await add_prompt(
            db,
            vault_id=vault_id,
            title=data.title,
            description=data.description,
            content=data.content,
            tags=await tag_service.resolve_tags(db, vault_id, data.tag_ids),
        )
    return await load_prompt(db, prompt.id)


async def update_prompt(
    db: AsyncSession, prompt_id: str, data: PromptUpdate
) -> Prompt | None:
    changes = data.model_dump(exclude_unset=True, exclude_none=True, include=set(VERSIONED_FIELDS))
    if not changes and data.tag_ids is None:
        # Nothing to change, so nothing to version
        return await db.get(Prompt, prompt_id)

    try:
        async with atomic(db):
            tags = None
            if data.tag_ids is not None:
                current = await version_service.lock_prompt(db, prompt_id)
                tags = await tag_service.resolve_tags(db, current.vault_id, data.tag_ids)
            await apply_changes(db, prompt_id, changes, tags=tags)
    except NotFound:
        return None

    return await load_prompt(db, prompt_id)


async def delete_prompt(db: AsyncSession, prompt_id: str) -> bool:
    prompt = await db.get(Prompt, prompt_id)
    if not prompt:
        return False

    # Versions and tag assignments go with it (ON DELETE CASCADE)
    async with atomic(db):
        await db.delete(prompt)
    return True
