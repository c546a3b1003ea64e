"""
Unit tests for the OpenAI client wrapper using a stub async client.
"""

from types import SimpleNamespace

import pytest

from devassist.core.config import Settings
from devassist.services.openai_client import OpenAIService


class StubCompletions:
    def __init__(self, choices, usage=None):
        self._choices = choices
        self._usage = usage
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(choices=self._choices, usage=self._usage)


def stub_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def choice(content):
    return SimpleNamespace(message=SimpleNamespace(content=content))


@pytest.mark.asyncio
async def test_chat_completion_requests_single_reply():
    usage = SimpleNamespace(prompt_tokens=12, completion_tokens=3, total_tokens=15)
    completions = StubCompletions([choice("first"), choice("second")], usage)
    service = OpenAIService(Settings(openai_chat_model="gpt-4o-mini"), client=stub_client(completions))
    messages = [{"role": "user", "content": "hi"}]

    reply, stats = await service.chat_completion(messages)

    assert reply == "first"
    assert stats["total_tokens"] == 15
    assert completions.kwargs == {"model": "gpt-4o-mini", "messages": messages, "n": 1}


@pytest.mark.asyncio
async def test_chat_completion_without_choices_returns_none():
    service = OpenAIService(Settings(), client=stub_client(StubCompletions([])))

    reply, stats = await service.chat_completion([])

    assert reply is None
    assert stats["total_tokens"] == 0
