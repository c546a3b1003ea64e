"""
Project file access for the relay.

Lists the files the widget may request and resolves a requested path in two
steps: the local project directory first, then the remote deployment.
"""

import logging
import os
from pathlib import Path
from urllib.parse import quote

import httpx

from devassist.core.config import Settings
from devassist.core.errors import FileResolutionError
from devassist.core.telemetry import get_tracer
from devassist.models.files import FileOrigin, ResolvedFile

logger = logging.getLogger(__name__)


def build_remote_client(
    timeout: float, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """HTTP client for the remote deployment; redirects are followed."""
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport)


def list_project_files(root: str, allowed_extensions: tuple[str, ...]) -> list[str]:
    """
    List the names in ``root`` that end with an allowed extension.

    Returns an empty list when the directory cannot be read.
    """
    try:
        names = os.listdir(root)
    except OSError as exc:
        logger.warning("Could not list project directory %s: %s", root, exc)
        return []
    return sorted(name for name in names if name.endswith(allowed_extensions))


class LocalFileSource:
    """Reads files from the project directory on disk."""

    def __init__(self, root: str) -> None:
        self._root = Path(root).resolve()

    def _locate(self, path: str) -> Path | None:
        candidate = (self._root / path).resolve()
        if not candidate.is_relative_to(self._root):
            logger.warning("Refusing local lookup outside project root: %s", path)
            return None
        return candidate

    def fetch(self, path: str) -> str | None:
        """Return the file's text, or None if it does not exist locally."""
        candidate = self._locate(path)
        if candidate is None or not candidate.is_file():
            return None
        return candidate.read_text(encoding="utf-8", errors="replace")


class RemoteFileSource:
    """Fetches files from the deployed copy of the project."""

    def __init__(self, base_url: str, client: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{quote(path.lstrip('/'), safe='/')}"

    async def fetch(self, path: str) -> str | None:
        """Return the response body on success, None on any non-2xx status."""
        url = self.url_for(path)
        logger.info("Fetching from remote: %s", url)
        response = await self._client.get(url)
        if response.is_success:
            return response.text
        logger.info("Remote returned %d for %s", response.status_code, url)
        return None


class FileResolver:
    """Resolves a path against the local source, then the remote one."""

    def __init__(self, local: LocalFileSource, remote: RemoteFileSource) -> None:
        self._local = local
        self._remote = remote
        self._tracer = get_tracer()

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient
    ) -> "FileResolver":
        return cls(
            LocalFileSource(settings.project_root),
            RemoteFileSource(settings.remote_file_base, client),
        )

    async def resolve(self, path: str) -> ResolvedFile | None:
        """
        Find a file by path.

        Args:
            path: Path relative to the project root (may contain slashes).

        Returns:
            The resolved file, or None when neither source has it.

        Raises:
            FileResolutionError: A read or transport error occurred.
        """
        with self._tracer.start_as_current_span("files.resolve") as span:
            span.set_attribute("files.path", path)

            try:
                content = self._local.fetch(path)
            except (OSError, ValueError) as exc:
                raise FileResolutionError(path, str(exc)) from exc
            if content is not None:
                logger.info("Found locally: %s", path)
                span.set_attribute("files.origin", FileOrigin.LOCAL.value)
                return ResolvedFile(path=path, content=content, origin=FileOrigin.LOCAL)

            try:
                content = await self._remote.fetch(path)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise FileResolutionError(path, str(exc)) from exc
            if content is not None:
                logger.info("Fetched from remote: %s", path)
                span.set_attribute("files.origin", FileOrigin.REMOTE.value)
                return ResolvedFile(path=path, content=content, origin=FileOrigin.REMOTE)

            logger.error("File not found: %s", path)
            return None
