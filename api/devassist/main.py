"""
FastAPI application entrypoint.

Registers routers, configures CORS, initializes telemetry,
and creates service instances on startup.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devassist.core.config import get_settings
from devassist.core.telemetry import setup_telemetry
from devassist.routers import chat, files, health
from devassist.services.files import FileResolver, build_remote_client
from devassist.services.openai_client import OpenAIService
from devassist.services.relay import ChatRelay

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """
    Application lifespan handler.
    Initializes service clients on startup, cleans up on shutdown.
    """
    settings = get_settings()

    # Configure logging
    logging.basicConfig(level=settings.log_level)

    # Initialize telemetry
    setup_telemetry(settings.applicationinsights_connection_string)

    if settings.openai_api_key:
        logger.info("Loaded key prefix: %s", settings.api_key_prefix)
    else:
        logger.warning("OPENAI_API_KEY is not set; chat requests will fail.")

    # Initialize service clients
    http_client = build_remote_client(settings.remote_timeout_seconds)
    openai_service = OpenAIService(settings)

    # Store in app state for dependency injection
    application.state.file_resolver = FileResolver.from_settings(settings, http_client)
    application.state.chat_relay = ChatRelay(openai_service)

    logger.info("AI dev assistant running on http://%s:%d", settings.host, settings.port)
    yield
    logger.info("AI dev assistant shutting down.")
    await http_client.aclose()
    await openai_service.close()


app = FastAPI(
    title="DevAssist Relay API",
    description="Relays chat turns and project files between the chat widget and an LLM provider.",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router)
app.include_router(files.router)
app.include_router(chat.router)


def run() -> None:
    """Serve the relay with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run("devassist.main:app", host=settings.host, port=settings.port)
