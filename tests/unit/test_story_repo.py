"""Tests for StoryRepository."""

from datetime import UTC, datetime, timedelta

import pytest

from lorekeeper.domain.story import JobStatus
from lorekeeper.repositories.story_repo import StoryRepository


class TestStoryRepository:
    """Tests for story persistence."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_empty_summary(self, test_session):
        repo = StoryRepository(test_session)

        record = await repo.create("A princess lived in a castle.")
        await test_session.commit()

        assert len(record.id) == 32
        assert record.original_text == "A princess lived in a castle."
        assert record.summary == ""
        assert record.created_at is not None
        assert record.status is JobStatus.PENDING

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, test_session):
        repo = StoryRepository(test_session)
        first = await repo.create("one")
        second = await repo.create("two")
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_get_by_id_roundtrip(self, test_session):
        repo = StoryRepository(test_session)
        created = await repo.create("A dragon slept.")
        await test_session.commit()

        fetched = await repo.get_by_id(created.id)

        assert fetched is not None
        assert fetched.original_text == "A dragon slept."

    @pytest.mark.asyncio
    async def test_get_unknown_id_returns_none(self, test_session):
        repo = StoryRepository(test_session)
        assert await repo.get_by_id("0" * 32) is None
        assert await repo.get_by_id("not-an-id") is None

    @pytest.mark.asyncio
    async def test_set_summary_once(self, session_factory):
        async with session_factory() as session:
            record = await StoryRepository(session).create("A knight rode out.")
            await session.commit()

        async with session_factory() as session:
            repo = StoryRepository(session)
            assert await repo.set_summary(record.id, "First summary") is True
            assert await repo.set_summary(record.id, "Second summary") is False
            await session.commit()

        async with session_factory() as session:
            stored = await StoryRepository(session).get_by_id(record.id)

        assert stored.summary == "First summary"
        assert stored.original_text == "A knight rode out."
        assert stored.status is JobStatus.COMPLETE

    @pytest.mark.asyncio
    async def test_set_summary_unknown_id(self, test_session):
        repo = StoryRepository(test_session)
        assert await repo.set_summary("missing", "text") is False

    @pytest.mark.asyncio
    async def test_list_pending_skips_summarized(self, session_factory):
        async with session_factory() as session:
            repo = StoryRepository(session)
            pending = await repo.create("still waiting")
            done = await repo.create("finished")
            await repo.set_summary(done.id, "summary")
            await session.commit()

        async with session_factory() as session:
            records = await StoryRepository(session).list_pending(
                created_before=datetime.now(UTC) + timedelta(minutes=5)
            )

        assert [r.id for r in records] == [pending.id]

    @pytest.mark.asyncio
    async def test_list_pending_respects_cutoff(self, test_session):
        repo = StoryRepository(test_session)
        await repo.create("too fresh")
        await test_session.commit()

        records = await repo.list_pending(created_before=datetime.now(UTC) - timedelta(hours=1))

        assert records == []
