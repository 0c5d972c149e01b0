"""Cached character operations: name extraction and in-character answers."""

import logging

from lorekeeper.infrastructure.llm_client import TextGenerator, system_message, user_message
from lorekeeper.services.cache import (
    ResponseCache,
    character_answer_key,
    character_names_key,
)

logger = logging.getLogger(__name__)

NAMES_SYSTEM_PROMPT = (
    "You are a helpful assistant. Please identify and return only the character "
    "names from the following story, separated by commas, with no additional text."
)
NAMES_USER_PROMPT = 'Extract and return only the character names from this story: "{story}"'

LOREKEEPER_SYSTEM_PROMPT = (
    "You are a wise and whimsical Lorekeeper, guardian of the Eternal Archives of "
    "Imagination. Your mind is a vast labyrinth of summarized tales and legends. "
    "Channel the essence of the story provided, weaving responses that would make "
    "even a stone golem chuckle. Be as clever as a sphinx and as entertaining as a "
    "bard's tale, but remember, young scribe, the best stories are those that dance "
    "on the edge of wisdom and wit!"
)
STORY_CONTEXT_PROMPT = 'Here is a summarized story: "{summarized_story}"'
CHARACTER_QUESTION_PROMPT = (
    'As the character "{character_name}", please answer this question: "{query}"'
)


class CharacterService:
    """Character-facing LLM operations backed by a shared response cache."""

    def __init__(self, generator: TextGenerator, cache: ResponseCache) -> None:
        self.generator = generator
        self.cache = cache

    async def extract_character_names(self, story: str) -> str:
        """Return the story's character names as a comma-separated string."""

        async def compute() -> str:
            text = await self.generator.generate([
                system_message(NAMES_SYSTEM_PROMPT),
                user_message(NAMES_USER_PROMPT.format(story=story)),
            ])
            return text.strip()

        return await self.cache.get_or_compute(character_names_key(story), compute)

    async def ask_character(
        self,
        query: str,
        character_name: str,
        summarized_story: str,
    ) -> str:
        """Answer a question in the voice of a character from the summarized story."""

        async def compute() -> str:
            return await self.generator.generate([
                system_message(LOREKEEPER_SYSTEM_PROMPT),
                user_message(STORY_CONTEXT_PROMPT.format(summarized_story=summarized_story)),
                user_message(
                    CHARACTER_QUESTION_PROMPT.format(character_name=character_name, query=query)
                ),
            ])

        key = character_answer_key(query, character_name, summarized_story)
        return await self.cache.get_or_compute(key, compute)
