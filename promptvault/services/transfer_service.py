"""Transfer service — export a vault's prompts and import them back."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.models.prompt import Prompt
from promptvault.models.tag import DEFAULT_TAG_COLOR, Tag
from promptvault.schemas.transfer import (
    ConflictResolution,
    ExportDocument,
    ExportPrompt,
    ExportTag,
    ExportVault,
    ImportData,
    ImportResult,
)
from promptvault.services import prompt_service, tag_service
from promptvault.services.version_service import atomic
from promptvault.utils.markdown import build_export_md

logger = logging.getLogger(__name__)


async def export_vault(db: AsyncSession, vault_id: str) -> ExportDocument:
    stmt = select(Prompt).where(Prompt.vault_id == vault_id).order_by(Prompt.created_at)
    result = await db.execute(stmt)
    prompts = [ExportPrompt.model_validate(p) for p in result.scalars().all()]
    return ExportDocument(
        exported_at=datetime.now(timezone.utc),
        vault=ExportVault(name=vault_id),
        tags=[ExportTag.model_validate(t) for t in await tag_service.list_tags(db, vault_id)],
        prompts=prompts,
    )


def export_markdown(document: ExportDocument) -> str:
    return build_export_md(document)


async def import_prompts(
    db: AsyncSession,
    vault_id: str,
    data: ImportData,
    conflict_resolution: ConflictResolution = ConflictResolution.SKIP,
) -> ImportResult:
    """Import prompts into a vault in a single transaction.

    Conflicts are matched on title, case-insensitively. Overwriting goes
    through the normal snapshot-then-change path, so the replaced text stays
    in the prompt's history. Tags are matched by name the same way and
    created when the vault does not have them yet.
    """
    results = ImportResult()

    async with atomic(db):
        tags_by_name = {t.name.lower(): t for t in await tag_service.list_tags(db, vault_id)}

        def tag_named(name: str, color: str | None = None) -> Tag:
            tag = tags_by_name.get(name.lower())
            if tag is None:
                tag = Tag(vault_id=vault_id, name=name, color=color or DEFAULT_TAG_COLOR)
                db.add(tag)
                tags_by_name[name.lower()] = tag
            return tag

        def tags_for(names: list[str]) -> list[Tag]:
            picked = {}
            for name in names:
                if name.strip():
                    tag = tag_named(name.strip())
                    picked[tag.name.lower()] = tag
            return list(picked.values())

        for entry in data.tags:
            if entry.name.strip():
                tag_named(entry.name.strip(), entry.color)

        existing = await db.execute(select(Prompt).where(Prompt.vault_id == vault_id))
        by_title = {p.title.lower(): p for p in existing.scalars().all()}

        for entry in data.prompts:
            if not entry.title.strip() or not entry.content:
                results.errors.append("Skipped prompt: missing title or content")
                results.skipped += 1
                continue

            match = by_title.get(entry.title.strip().lower())
            if match is None:
                prompt = await prompt_service.add_prompt(
                    db,
                    vault_id,
                    entry.title,
                    entry.description or "",
                    entry.content,
                    tags=tags_for(entry.tags),
                )
                by_title[prompt.title.lower()] = prompt
                results.imported += 1
            elif conflict_resolution == ConflictResolution.SKIP:
                results.skipped += 1
            elif conflict_resolution == ConflictResolution.OVERWRITE:
                await prompt_service.apply_changes(
                    db,
                    match.id,
                    {"description": entry.description or "", "content": entry.content},
                    tags=tags_for(entry.tags),
                )
                results.overwritten += 1
            else:
                await prompt_service.add_prompt(
                    db,
                    vault_id,
                    f"{entry.title.strip()} (imported)",
                    entry.description or "",
                    entry.content,
                    tags=tags_for(entry.tags),
                )
                results.duplicated += 1

    logger.info(
        "Import into vault %s: %d imported, %d overwritten, %d duplicated, %d skipped",
        vault_id, results.imported, results.overwritten, results.duplicated, results.skipped,
    )
    return results
