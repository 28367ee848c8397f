"""Tag ORM model and the prompt ↔ tag association table."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from promptvault.database import Base

DEFAULT_TAG_COLOR = "#6366f1"

prompt_tags = Table(
    "prompt_tags",
    Base.metadata,
    Column("prompt_id", String(36), ForeignKey("prompts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("assigned_at", DateTime, server_default=func.now()),
)


class Tag(Base):
    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("vault_id", "name", name="uq_tag_vault_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    vault_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(Text)
    color: Mapped[str] = mapped_column(String(32), default=DEFAULT_TAG_COLOR)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
