"""Version service — append-only snapshot history for prompts.

Every change to a prompt's title, description or content is preceded by a
snapshot of the state it replaces, written in the same transaction as the
change. Version numbers run 1, 2, 3 ... per prompt with no gaps: the next
number is read from the table while the prompt row is locked (or, on
SQLite, guarded by the prompt's ``revision`` check at commit), and the
``(prompt_id, version_number)`` unique constraint fails any writer that
still collides.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from promptvault.models.prompt import Prompt, utcnow
from promptvault.models.version import PromptVersion
from promptvault.schemas.version import VersionComparison, VersionResponse
from promptvault.services import diff_service
from promptvault.services.exceptions import NotFound, StorageFailure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(db: AsyncSession) -> AsyncIterator[None]:
    """Commit everything done inside the block, or nothing.

    Database errors are rolled back and re-raised as ``StorageFailure``;
    any other exception is rolled back and propagates unchanged.
    """
    try:
        yield
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Unit of work rolled back: %s", exc)
        raise StorageFailure("Could not save changes, nothing was applied") from exc
    except Exception:
        await db.rollback()
        raise


async def lock_prompt(db: AsyncSession, prompt_id: str) -> Prompt:
    """Load a prompt for modification, holding its row lock until commit.

    Serialises writers on the same prompt where the backend has row locks.
    SQLite ignores FOR UPDATE; there the `revision` counter on `Prompt`
    does the work: if another writer committed after this read, the UPDATE
    matches no row, StaleDataError fails the flush and `atomic` rolls the
    snapshot back with it. Always re-reads the row so the snapshot starts
    from committed state rather than a stale identity-map copy.
    """
    stmt = (
        select(Prompt)
        .where(Prompt.id == prompt_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    prompt = (await db.execute(stmt)).scalar_one_or_none()
    if prompt is None:
        raise NotFound("Prompt", prompt_id)
    return prompt


async def load_prompt(db: AsyncSession, prompt_id: str) -> Prompt | None:
    """Re-read a prompt and its tags, replacing whatever the session holds."""
    stmt = select(Prompt).where(Prompt.id == prompt_id).execution_options(populate_existing=True)
    return (await db.execute(stmt)).scalar_one_or_none()


async def _max_version_number(db: AsyncSession, prompt_id: str) -> int | None:
    stmt = select(func.max(PromptVersion.version_number)).where(
        PromptVersion.prompt_id == prompt_id
    )
    return (await db.execute(stmt)).scalar()


async def snapshot(db: AsyncSession, prompt: Prompt, *, initial: bool = False) -> PromptVersion:
    """Record ``prompt``'s current fields as the next version.

    Flushes but does not commit: the caller's transaction must also carry
    the change the snapshot precedes. ``initial`` marks the version written
    when the prompt is created; any other call on a prompt with no history
    is an invariant violation.
    """
    exists = await db.execute(select(Prompt.id).where(Prompt.id == prompt.id))
    if exists.scalar_one_or_none() is None:
        raise NotFound("Prompt", prompt.id)

    current = await _max_version_number(db, prompt.id)
    if initial and current is not None:
        raise StorageFailure(f"Prompt {prompt.id} already has version history")
    if not initial and current is None:
        raise StorageFailure(f"Prompt {prompt.id} has no version history")

    version = PromptVersion(
        prompt_id=prompt.id,
        title=prompt.title,
        description=prompt.description,
        content=prompt.content,
        version_number=(current or 0) + 1,
    )
    db.add(version)
    await db.flush()
    logger.debug("Snapshot v%d of prompt %s", version.version_number, prompt.id)
    return version


async def _ensure_prompt(db: AsyncSession, prompt_id: str) -> None:
    if await db.get(Prompt, prompt_id) is None:
        raise NotFound("Prompt", prompt_id)


async def list_versions(db: AsyncSession, prompt_id: str) -> list[PromptVersion]:
    """All versions of a prompt, newest first."""
    await _ensure_prompt(db, prompt_id)
    stmt = (
        select(PromptVersion)
        .where(PromptVersion.prompt_id == prompt_id)
        .order_by(PromptVersion.version_number.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_versions(db: AsyncSession, prompt_id: str) -> int:
    stmt = (
        select(func.count())
        .select_from(PromptVersion)
        .where(PromptVersion.prompt_id == prompt_id)
    )
    return (await db.execute(stmt)).scalar_one()


async def get_version(db: AsyncSession, prompt_id: str, version_id: str) -> PromptVersion:
    await _ensure_prompt(db, prompt_id)
    # Scoped to the prompt: a version id from another prompt is "not found"
    stmt = select(PromptVersion).where(
        PromptVersion.id == version_id,
        PromptVersion.prompt_id == prompt_id,
    )
    version = (await db.execute(stmt)).scalar_one_or_none()
    if version is None:
        raise NotFound("Version", version_id)
    return version


async def restore(db: AsyncSession, prompt_id: str, version_id: str) -> tuple[Prompt, PromptVersion]:
    """Point the prompt back at an earlier version.

    The state being replaced is kept as a new version first, so nothing in
    the history is lost. Only content fields and ``updated_at`` change; the
    prompt keeps its id and ``created_at``.

    Returns the updated prompt and the version it was restored from.
    """
    async with atomic(db):
        prompt = await lock_prompt(db, prompt_id)
        target = await get_version(db, prompt_id, version_id)

        await snapshot(db, prompt)

        prompt.title = target.title
        prompt.description = target.description
        prompt.content = target.content
        # Always differs, so the UPDATE (and its revision check) is always emitted
        prompt.updated_at = utcnow()

    prompt = await load_prompt(db, prompt_id)
    logger.info("Restored prompt %s to version %d", prompt_id, target.version_number)
    return prompt, target


async def compare_versions(
    db: AsyncSession, prompt_id: str, old_version_id: str, new_version_id: str
) -> VersionComparison:
    old = await get_version(db, prompt_id, old_version_id)
    new = await get_version(db, prompt_id, new_version_id)
    lines = diff_service.diff_lines(old.content, new.content)
    return VersionComparison(
        prompt_id=prompt_id,
        old=VersionResponse.model_validate(old),
        new=VersionResponse.model_validate(new),
        lines=lines,
        summary=diff_service.summarize(lines),
    )
