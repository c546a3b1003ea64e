"""
Chat relay: the core of POST /api/chat.

Builds the two-message prompt from the widget's message, file context and
system prompt, forwards it to the provider and returns the reply text.
"""

import logging

from openai import OpenAIError

from devassist.core.errors import ProviderError
from devassist.core.telemetry import get_tracer
from devassist.services.openai_client import OpenAIService

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an assistant that helps with web development, PyScript, and "
    "component integration. Provide clear, concise code examples."
)

NO_FILE_CONTEXT = "No file context provided."


class ChatRelay:
    """Proxies one chat turn to the LLM provider."""

    def __init__(self, openai_service: OpenAIService) -> None:
        self._openai = openai_service
        self._tracer = get_tracer()

    async def chat(
        self,
        message: str,
        file_context: str | None = None,
        system_prompt: str | None = None,
    ) -> str:
        """
        Relay a user message to the provider.

        Args:
            message: The user's message.
            file_context: Labelled file bodies gathered by the widget.
            system_prompt: Overrides DEFAULT_SYSTEM_PROMPT when non-empty.

        Returns:
            The text of the provider's first reply.

        Raises:
            ProviderError: The provider call failed or returned no reply.
        """
        with self._tracer.start_as_current_span("relay.chat") as span:
            span.set_attribute("relay.message_length", len(message))
            span.set_attribute("relay.file_context_length", len(file_context or ""))
            logger.info('Chat request: "%s..."', message[:50])

            llm_messages = self.build_messages(message, file_context, system_prompt)
            try:
                reply, _ = await self._openai.chat_completion(llm_messages)
            except OpenAIError as exc:
                logger.error("OpenAI API error: %s", exc)
                raise ProviderError(str(exc)) from exc

            if reply is None:
                logger.error("OpenAI API returned no reply content")
                raise ProviderError("Provider response contained no reply")

            logger.info("AI responded")
            return reply

    @staticmethod
    def build_messages(
        message: str,
        file_context: str | None = None,
        system_prompt: str | None = None,
    ) -> list[dict[str, str]]:
        """Assemble the provider message array: system + user."""
        return [
            {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    f"User message: {message}\n\n"
                    f"File Context:\n{file_context or NO_FILE_CONTEXT}"
                ),
            },
        ]
