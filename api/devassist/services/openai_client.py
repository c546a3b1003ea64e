"""
OpenAI client wrapper.

Sends chat completions to the OpenAI API using the key from settings.
"""

import logging

from openai import AsyncOpenAI

from devassist.core.config import Settings
from devassist.core.telemetry import get_tracer

logger = logging.getLogger(__name__)


class OpenAIService:
    """Wrapper around the OpenAI async client for chat completions."""

    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings
        self._tracer = get_tracer()
        self._client = client or AsyncOpenAI(api_key=settings.openai_api_key)

    @property
    def model(self) -> str:
        return self._settings.openai_chat_model

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
    ) -> tuple[str | None, dict]:
        """
        Generate a single chat completion.

        Args:
            messages: The prompt messages (system + user).

        Returns:
            Tuple of (reply_text, usage_metadata). The reply is None when the
            provider returned no choices.

        Raises:
            openai.OpenAIError: Authentication, rate limit, or network failure.
        """
        with self._tracer.start_as_current_span("openai.chat") as span:
            span.set_attribute("openai.model", self.model)

            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                n=1,
            )

            reply = response.choices[0].message.content if response.choices else None
            usage = {
                "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
                "completion_tokens": response.usage.completion_tokens if response.usage else 0,
                "total_tokens": response.usage.total_tokens if response.usage else 0,
            }

            span.set_attribute("openai.prompt_tokens", usage["prompt_tokens"])
            span.set_attribute("openai.completion_tokens", usage["completion_tokens"])
            logger.info("Chat completion: %d tokens used", usage["total_tokens"])

            return reply, usage

    async def close(self) -> None:
        await self._client.close()
