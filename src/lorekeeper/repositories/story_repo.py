"""Story repository for database operations."""

import uuid
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lorekeeper.domain.story import StoryRecord
from lorekeeper.infrastructure.models import StoryModel


def _to_record(model: StoryModel) -> StoryRecord:
    return StoryRecord(
        id=model.id,
        original_text=model.original_story,
        summary=model.summary or "",
        created_at=model.created_at,
    )


class StoryRepository:
    """Repository for StoryRecord persistence."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, original_text: str) -> StoryRecord:
        """Insert a new story with an empty summary."""
        model = StoryModel(
            id=uuid.uuid4().hex,
            original_story=original_text,
            summary="",
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return _to_record(model)

    async def get_by_id(self, story_id: str) -> StoryRecord | None:
        """Get a story by its ID."""
        stmt = select(StoryModel).where(StoryModel.id == story_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_record(model) if model else None

    async def set_summary(self, story_id: str, summary: str) -> bool:
        """Store the summary if the story is still pending.

        Returns:
            True if the story was updated, False if it is unknown or
            already summarized.
        """
        stmt = (
            update(StoryModel)
            .where(StoryModel.id == story_id, StoryModel.summary == "")
            .values(summary=summary)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_pending(
        self,
        created_before: datetime,
        limit: int = 20,
    ) -> list[StoryRecord]:
        """List stories still waiting for a summary, oldest first."""
        stmt = (
            select(StoryModel)
            .where(StoryModel.summary == "", StoryModel.created_at < created_before)
            .order_by(StoryModel.created_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [_to_record(m) for m in result.scalars().all()]
