"""
Unit tests for the chat relay.

Tests prompt assembly and error conversion with a mocked OpenAI service.
"""

import httpx
import openai
import pytest

from devassist.core.errors import ProviderError
from devassist.services.relay import DEFAULT_SYSTEM_PROMPT, NO_FILE_CONTEXT, ChatRelay


class MockOpenAIService:
    """Mock OpenAI service that records the prompts it receives."""

    def __init__(self, reply="Use flexbox.", error=None):
        self._reply = reply
        self._error = error
        self.calls = []

    async def chat_completion(self, messages):
        self.calls.append(messages)
        if self._error is not None:
            raise self._error
        return self._reply, {"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150}


def _connection_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return openai.APIConnectionError(request=request)


@pytest.mark.asyncio
async def test_chat_returns_reply():
    """The provider's first reply is returned unchanged."""
    service = MockOpenAIService(reply="Set display: grid.")
    relay = ChatRelay(service)

    reply = await relay.chat("How do I center this?", "\n\n--- FILE: style.css ---\nbody {}")

    assert reply == "Set display: grid."
    assert len(service.calls) == 1


@pytest.mark.asyncio
async def test_missing_file_context_uses_placeholder():
    """A message without file context ends with the placeholder text."""
    service = MockOpenAIService()
    relay = ChatRelay(service)

    await relay.chat("hello")

    system, user = service.calls[0]
    assert system == {"role": "system", "content": DEFAULT_SYSTEM_PROMPT}
    assert user["role"] == "user"
    assert user["content"].startswith("User message: hello")
    assert user["content"].endswith(NO_FILE_CONTEXT)


@pytest.mark.asyncio
async def test_empty_system_prompt_falls_back_to_default():
    """An empty system prompt is treated as absent."""
    service = MockOpenAIService()
    relay = ChatRelay(service)

    await relay.chat("hello", "", "")

    assert service.calls[0][0]["content"] == DEFAULT_SYSTEM_PROMPT
    assert service.calls[0][1]["content"].endswith(NO_FILE_CONTEXT)


def test_build_messages_embeds_context_and_custom_prompt():
    """Custom system prompt and file context both reach the prompt."""
    context = "\n\n--- FILE: app.py ---\nprint('hi')"
    messages = ChatRelay.build_messages("why?", context, "Be terse.")

    assert messages[0] == {"role": "system", "content": "Be terse."}
    assert messages[1]["content"] == f"User message: why?\n\nFile Context:\n{context}"


@pytest.mark.asyncio
async def test_provider_failure_raises_provider_error():
    """Transport failures from the provider surface as ProviderError."""
    relay = ChatRelay(MockOpenAIService(error=_connection_error()))

    with pytest.raises(ProviderError) as excinfo:
        await relay.chat("hello")

    assert excinfo.value.details


@pytest.mark.asyncio
async def test_empty_provider_response_raises_provider_error():
    """A response without reply content is reported as a provider failure."""
    relay = ChatRelay(MockOpenAIService(reply=None))

    with pytest.raises(ProviderError, match="no reply"):
        await relay.chat("hello")
