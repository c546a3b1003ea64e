"""
Chat widget controller.

Collects a user turn, attaches the contents of project files whose keywords
appear in the message, sends everything to the relay and records the reply
in the session transcript.
"""

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from devassist.models.chat import ChatResponse
from devassist.widget.session import ChatSession, Role

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Error connecting to AI assistant. Is the backend running?"


class WidgetConfig(BaseModel):
    """Settings recognised by ``ChatWidget.initialize``."""

    api_base: str = Field("http://localhost:3000", description="Relay base URL")
    file_map: dict[str, str] = Field(
        default_factory=dict, description="Keyword to filename, in scan order"
    )
    system_prompt: str = Field(
        "You are a helpful coding assistant.",
        description="System prompt sent with every turn",
    )

    @field_validator("api_base", "system_prompt", mode="before")
    @classmethod
    def blank_means_default(cls, value, info: ValidationInfo):
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value


def match_keywords(text: str, file_map: dict[str, str]) -> list[str]:
    """
    Return the filenames whose keyword occurs in ``text``.

    Matching is a case-insensitive substring test in file_map order. A
    filename reached by several keywords is listed once, at its first match.
    """
    lowered = text.lower()
    filenames: list[str] = []
    for keyword, filename in file_map.items():
        if keyword.lower() in lowered and filename not in filenames:
            filenames.append(filename)
    return filenames


def format_file_block(filename: str, content: str) -> str:
    return f"\n\n--- FILE: {filename} ---\n{content}"


class ChatWidget:
    """Drives one chat session against the relay."""

    def __init__(
        self,
        config: WidgetConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = WidgetConfig()
        self.session: ChatSession | None = None
        self._client = client
        self.initialize(config)

    def initialize(self, config: WidgetConfig | None = None) -> ChatSession:
        """
        Apply ``config`` and make sure the session and HTTP client exist.

        Calling this again keeps the existing session and client.
        """
        if config is not None:
            self.config = config
        if self.session is None:
            self.session = ChatSession()
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self.session

    def _url(self, path: str) -> str:
        return f"{self.config.api_base.rstrip('/')}{path}"

    async def load_file(self, filename: str) -> str | None:
        """Fetch a file's text from the relay, or None if it is unavailable."""
        try:
            response = await self._client.get(self._url(f"/api/file/{filename}"))
        except httpx.HTTPError as exc:
            logger.warning("Could not load file: %s (%s)", filename, exc)
            return None
        if response.is_success:
            return response.text
        logger.warning("Could not load file: %s (HTTP %d)", filename, response.status_code)
        return None

    async def build_file_context(self, text: str) -> str:
        """Concatenate the labelled contents of every file matched by ``text``."""
        blocks = []
        for filename in match_keywords(text, self.config.file_map):
            content = await self.load_file(filename)
            if content:
                blocks.append(format_file_block(filename, content))
        return "".join(blocks)

    async def submit_turn(self, text: str) -> None:
        """
        Send one user turn and record the outcome.

        Does nothing while a previous turn is in flight or when ``text`` is
        blank. Relay failures become a fixed error entry in the transcript.
        """
        session = self.session
        if session.busy:
            return
        text = text.strip()
        if not text:
            return

        session.busy = True
        try:
            session.draft = ""
            session.add_message(Role.USER, text)
            file_context = await self.build_file_context(text)
            reply = await self._send_chat(text, file_context)
            if reply is None:
                session.add_message(Role.ASSISTANT, CONNECTION_ERROR_MESSAGE)
            else:
                session.add_message(Role.ASSISTANT, reply)
        finally:
            session.busy = False

    async def _send_chat(self, text: str, file_context: str) -> str | None:
        payload = {
            "message": text,
            "fileContext": file_context,
            "systemPrompt": self.config.system_prompt,
        }
        try:
            response = await self._client.post(self._url("/api/chat"), json=payload)
            response.raise_for_status()
            return ChatResponse.model_validate_json(response.content).reply
        except (httpx.HTTPError, ValidationError) as exc:
            logger.error("Chat error: %s", exc)
            return None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
