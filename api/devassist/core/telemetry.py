"""
Telemetry module for OpenTelemetry + Application Insights.

Configures distributed tracing for the relay. Services open spans named
`files.resolve`, `relay.chat` and `openai.chat` on the shared tracer.
"""

import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

SERVICE_NAME = "devassist-relay"
SERVICE_NAMESPACE = "devassist"

_tracer: trace.Tracer | None = None


def setup_telemetry(connection_string: str) -> TracerProvider:
    """
    Initialize OpenTelemetry with Application Insights exporter.

    Args:
        connection_string: Application Insights connection string.
                          If empty, telemetry is disabled (local dev).

    Returns:
        The provider the application tracer was created from.
    """
    global _tracer

    resource = Resource.create(
        {"service.name": SERVICE_NAME, "service.namespace": SERVICE_NAMESPACE}
    )
    provider = TracerProvider(resource=resource)

    if connection_string:
        try:
            from azure.monitor.opentelemetry.exporter import (
                AzureMonitorTraceExporter,
            )

            exporter = AzureMonitorTraceExporter(
                connection_string=connection_string
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
            logger.info("Application Insights telemetry enabled.")
        except ImportError:
            logger.warning(
                "azure-monitor-opentelemetry-exporter not installed. "
                "Telemetry will not be exported."
            )
    else:
        logger.info("No connection string provided. Telemetry export disabled.")

    trace.set_tracer_provider(provider)
    _tracer = provider.get_tracer(SERVICE_NAME)
    return provider


def get_tracer() -> trace.Tracer:
    """Return the application tracer, initializing a no-op if not set up."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SERVICE_NAME)
    return _tracer
