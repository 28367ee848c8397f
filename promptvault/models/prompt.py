"""Prompt ORM model — the mutable template whose history is versioned."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from promptvault.database import Base
from promptvault.models.tag import prompt_tags

if TYPE_CHECKING:
    from promptvault.models.tag import Tag


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Naive UTC with microseconds; SQLite's CURRENT_TIMESTAMP only has seconds
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Prompt(Base):
    __tablename__ = "prompts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    vault_id: Mapped[str] = mapped_column(String(64), index=True)  # owning collection
    title: Mapped[str] = mapped_column(Text, index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    content: Mapped[str] = mapped_column(Text)  # body with {{variables}}
    # Bumped on every UPDATE; a write based on a stale read matches no row
    revision: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    tags: Mapped[list[Tag]] = relationship(
        secondary=prompt_tags, lazy="selectin", order_by="Tag.name"
    )

    __mapper_args__ = {"version_id_col": revision}
