"""Text-generation client backed by the OpenAI chat completions API."""

import logging
from typing import Protocol

from openai import AsyncOpenAI

from lorekeeper.domain.errors import UpstreamError

logger = logging.getLogger(__name__)

ChatMessage = dict[str, str]


class TextGenerator(Protocol):
    """Anything that turns role-tagged messages into generated text."""

    async def generate(self, messages: list[ChatMessage]) -> str: ...


class OpenAITextGenerator:
    """Async text generator using OpenAI chat completions."""

    def __init__(self, api_key: str, model: str) -> None:
        """Initialize the generator. The OpenAI client is created on first use."""
        self.api_key = api_key
        self.model = model
        self.client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self.client is None:
            self.client = AsyncOpenAI(api_key=self.api_key)
        return self.client

    async def generate(self, messages: list[ChatMessage]) -> str:
        """Send messages to the model and return the raw completion text.

        Raises:
            UpstreamError: if the key is missing, the call fails, or the
                completion carries no text.
        """
        if not self.api_key:
            raise UpstreamError("OpenAI API key not configured")

        try:
            completion = await self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
            )
        except Exception as e:
            logger.error(f"Text generation with {self.model} failed: {e}")
            raise UpstreamError(f"Text generation failed: {e}") from e

        if not completion.choices:
            raise UpstreamError("Text generation returned no choices")
        content = completion.choices[0].message.content
        if content is None:
            raise UpstreamError("Text generation returned no content")
        return content


def system_message(content: str) -> ChatMessage:
    return {"role": "system", "content": content}


def user_message(content: str) -> ChatMessage:
    return {"role": "user", "content": content}
