"""PromptVersion — immutable snapshot of a prompt taken before each change."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from promptvault.database import Base
from promptvault.models.prompt import _new_id


class PromptVersion(Base):
    __tablename__ = "prompt_versions"
    __table_args__ = (
        # Backstop for racing writers: a duplicate number fails the whole transaction
        UniqueConstraint("prompt_id", "version_number", name="uq_prompt_version_number"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    prompt_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("prompts.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text, default="")
    content: Mapped[str] = mapped_column(Text)
    version_number: Mapped[int] = mapped_column(Integer)  # 1, 2, 3 ... per prompt
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
