"""
Tests for tracer setup and the spans emitted by the relay.
"""

import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from devassist.core import telemetry
from devassist.services.relay import ChatRelay


class MockOpenAIService:
    async def chat_completion(self, messages):
        return "ok", {"total_tokens": 0}


@pytest.fixture
def exporter(monkeypatch):
    monkeypatch.setattr(telemetry, "_tracer", None)
    provider = telemetry.setup_telemetry("")
    span_exporter = InMemorySpanExporter()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider, span_exporter
    span_exporter.clear()


def test_resource_identifies_relay(exporter):
    provider, _ = exporter
    attributes = provider.resource.attributes
    assert attributes["service.name"] == telemetry.SERVICE_NAME
    assert attributes["service.namespace"] == telemetry.SERVICE_NAMESPACE


@pytest.mark.asyncio
async def test_chat_emits_relay_span(exporter):
    _, span_exporter = exporter
    relay = ChatRelay(MockOpenAIService())

    await relay.chat("hello", "\n\n--- FILE: a.py ---\nx = 1")

    spans = {span.name: span for span in span_exporter.get_finished_spans()}
    assert "relay.chat" in spans
    assert spans["relay.chat"].attributes["relay.message_length"] == 5
