"""Wiring of the application's long-lived collaborators."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lorekeeper.config import Settings
from lorekeeper.infrastructure.database import create_engine, create_session_factory
from lorekeeper.infrastructure.llm_client import OpenAITextGenerator, TextGenerator
from lorekeeper.infrastructure.vector_store import ChromaVectorSink, VectorSink
from lorekeeper.services.cache import ResponseCache
from lorekeeper.services.characters import CharacterService
from lorekeeper.services.jobs import JobTracker
from lorekeeper.services.summarizer import SummarizerService


@dataclass
class Services:
    """Everything request handlers need, built once per process."""

    session_factory: async_sessionmaker[AsyncSession]
    job_tracker: JobTracker
    character_service: CharacterService
    cache: ResponseCache
    engine: AsyncEngine | None = None


def build_services(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    generator: TextGenerator | None = None,
    vector_sink: VectorSink | None = None,
    cache: ResponseCache | None = None,
) -> Services:
    """Build the service graph, using real collaborators for anything not given."""
    engine = None
    if session_factory is None:
        engine = create_engine(settings.database_url, echo=not settings.is_production)
        session_factory = create_session_factory(engine)

    if generator is None:
        generator = OpenAITextGenerator(api_key=settings.openai_api_key, model=settings.llm_model)

    if vector_sink is None and settings.vector_store_enabled:
        vector_sink = ChromaVectorSink(
            host=settings.chroma_host,
            port=settings.chroma_port,
            collection_name=settings.chroma_collection,
        )

    if cache is None:
        cache = ResponseCache(ttl_seconds=settings.cache_ttl_seconds)

    summarizer = SummarizerService(generator, chunk_size=settings.chunk_size)
    return Services(
        session_factory=session_factory,
        job_tracker=JobTracker(session_factory, summarizer, vector_sink),
        character_service=CharacterService(generator, cache),
        cache=cache,
        engine=engine,
    )
