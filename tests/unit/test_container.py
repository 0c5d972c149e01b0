"""Tests for service wiring."""

from lorekeeper.config import Settings
from lorekeeper.container import build_services
from lorekeeper.infrastructure.llm_client import OpenAITextGenerator
from lorekeeper.infrastructure.vector_store import ChromaVectorSink


class TestBuildServices:
    """Tests for build_services."""

    def test_builds_real_collaborators(self):
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            openai_api_key="test-key",
            cache_ttl_seconds=30,
        )
        services = build_services(settings)

        assert services.engine is not None
        assert isinstance(services.character_service.generator, OpenAITextGenerator)
        assert services.character_service.cache is services.cache
        assert services.cache.ttl_seconds == 30
        assert services.job_tracker.vector_sink is None
        assert services.job_tracker.summarizer.chunk_size == 1000

    def test_vector_sink_built_when_host_set(self):
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///:memory:",
            chroma_host="chromadb",
            chroma_collection="lore",
        )
        services = build_services(settings)

        sink = services.job_tracker.vector_sink
        assert isinstance(sink, ChromaVectorSink)
        assert sink.collection_name == "lore"

    def test_injected_collaborators_used(self, settings, session_factory, fake_generator):
        services = build_services(
            settings, session_factory=session_factory, generator=fake_generator
        )

        assert services.engine is None
        assert services.session_factory is session_factory
        assert services.job_tracker.summarizer.generator is fake_generator
        assert services.character_service.generator is fake_generator
