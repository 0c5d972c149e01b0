"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StoryModel(Base):
    """SQLAlchemy model for stories table.

    An empty ``summary`` means summarization has not finished yet.
    """

    __tablename__ = "stories"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    original_story: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
