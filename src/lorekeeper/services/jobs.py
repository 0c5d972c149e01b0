"""Submit/poll job tracking for story summarization."""

import asyncio
import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lorekeeper.domain.story import PollResult
from lorekeeper.infrastructure.vector_store import VectorSink
from lorekeeper.repositories.story_repo import StoryRepository
from lorekeeper.services.summarizer import SummarizerService

logger = logging.getLogger(__name__)


class JobTracker:
    """Persists submitted stories and fills in their summaries in the background.

    A story is pending until its background task stores a summary. If the task
    fails, the failure is logged and the story stays pending; there is no
    failed state.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        summarizer: SummarizerService,
        vector_sink: VectorSink | None = None,
    ) -> None:
        """Initialize the tracker with its collaborators."""
        self.session_factory = session_factory
        self.summarizer = summarizer
        self.vector_sink = vector_sink
        self._tasks: dict[str, asyncio.Task[None]] = {}

    @property
    def in_flight(self) -> int:
        """Number of background summarizations not yet finished."""
        return len(self._tasks)

    async def submit(self, text: str) -> str:
        """Store a new pending story and start summarizing it without waiting.

        Returns:
            The new story's id
        """
        async with self.session_factory() as session:
            record = await StoryRepository(session).create(text)
            await session.commit()

        self._spawn(record.id, text)
        logger.info(f"Accepted story {record.id} ({len(text)} chars)")
        return record.id

    async def poll(self, story_id: str) -> PollResult:
        """Report whether a story's summary is ready."""
        async with self.session_factory() as session:
            record = await StoryRepository(session).get_by_id(story_id)

        if record is None:
            return PollResult.not_found()
        return PollResult.from_record(record)

    async def resume_stale(self, min_age: timedelta, limit: int = 20) -> int:
        """Restart summarization for stories pending longer than ``min_age``.

        Stories whose background task is still running are skipped.

        Returns:
            Number of jobs spawned
        """
        cutoff = datetime.now(UTC) - min_age
        async with self.session_factory() as session:
            pending = await StoryRepository(session).list_pending(
                created_before=cutoff, limit=limit
            )

        spawned = 0
        for record in pending:
            if self._spawn(record.id, record.original_text):
                spawned += 1
        return spawned

    async def drain(self) -> None:
        """Wait for every background summarization started so far."""
        if self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)

    def _spawn(self, story_id: str, text: str) -> bool:
        if story_id in self._tasks:
            logger.info(f"Story {story_id} is already being summarized")
            return False
        task = asyncio.create_task(
            self._summarize_story(story_id, text),
            name=f"summarize-{story_id}",
        )
        self._tasks[story_id] = task
        task.add_done_callback(lambda _: self._tasks.pop(story_id, None))
        return True

    async def _summarize_story(self, story_id: str, text: str) -> None:
        try:
            summary = await self.summarizer.summarize(text)

            async with self.session_factory() as session:
                updated = await StoryRepository(session).set_summary(story_id, summary)
                await session.commit()
        except Exception as e:
            logger.error(f"Summarization failed for story {story_id}: {e}", exc_info=True)
            return

        if not updated:
            logger.warning(f"Story {story_id} already summarized or gone; result dropped")
            return
        logger.info(f"Stored summary for story {story_id}")

        if self.vector_sink is not None:
            await self._index_summary(story_id, summary)

    async def _index_summary(self, story_id: str, summary: str) -> None:
        try:
            await self.vector_sink.add(
                ids=[story_id],
                documents=[summary],
                metadatas=[{"story_id": story_id, "kind": "summary"}],
            )
        except Exception as e:
            logger.warning(f"Vector store add failed for story {story_id}: {e}")
