"""Chunk-and-summarize pipeline over a text generator."""

import logging

from lorekeeper.domain.errors import UpstreamError
from lorekeeper.infrastructure.llm_client import TextGenerator, system_message, user_message
from lorekeeper.services.chunker import DEFAULT_CHUNK_SIZE, chunk_text

logger = logging.getLogger(__name__)

CHUNK_SYSTEM_PROMPT = (
    "You are a helpful assistant who summarizes text concisely, "
    "keeping every named character and key event."
)
CHUNK_USER_PROMPT = 'Summarize the following text concisely: "{chunk}"'

FINAL_SYSTEM_PROMPT = (
    "You are a creative assistant who will generate a complete and short story "
    "based on the given text."
)
FINAL_USER_PROMPT = 'Please write a creative and short story based on the following text: "{text}"'


class SummarizerService:
    """Turns a story into a summary in two phases.

    1. Every chunk is summarized on its own, strictly in order.
    2. The joined chunk summaries are rewritten into one short story.
    """

    def __init__(
        self,
        generator: TextGenerator,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Initialize the summarizer."""
        self.generator = generator
        self.chunk_size = chunk_size

    async def summarize_chunks(self, chunks: list[str]) -> str:
        """Summarize each chunk sequentially and join the trimmed results."""
        summaries = []
        for index, chunk in enumerate(chunks, start=1):
            text = await self.generator.generate([
                system_message(CHUNK_SYSTEM_PROMPT),
                user_message(CHUNK_USER_PROMPT.format(chunk=chunk)),
            ])
            summaries.append(text.strip())
            logger.debug(f"Summarized chunk {index}/{len(chunks)}")
        return " ".join(summaries)

    async def synthesize(self, text: str) -> str:
        """Rewrite text into the final creative summary.

        Raises:
            UpstreamError: if the model answers with blank text
        """
        result = await self.generator.generate([
            system_message(FINAL_SYSTEM_PROMPT),
            user_message(FINAL_USER_PROMPT.format(text=text)),
        ])
        summary = result.strip()
        if not summary:
            raise UpstreamError("Text generation returned an empty summary")
        return summary

    async def summarize(self, text: str) -> str:
        """Summarize a story.

        Any failing text-generation call aborts the whole operation.

        Raises:
            ValueError: if the text contains no words
        """
        chunks = chunk_text(text, self.chunk_size)
        if not chunks:
            raise ValueError("Cannot summarize empty text")

        logger.info(f"Summarizing {len(text)} characters in {len(chunks)} chunk(s)")
        combined = await self.summarize_chunks(chunks)
        return await self.synthesize(combined)
