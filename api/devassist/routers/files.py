"""
Files router: GET /api/files and GET /api/file/{path}.

Lists project files and serves their text, falling back to the remote
deployment for files missing on disk.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from devassist.core.config import Settings, get_settings
from devassist.core.errors import FileResolutionError
from devassist.services.files import list_project_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])

NOT_FOUND_MESSAGE = "File not found locally or on remote"
LOAD_ERROR_MESSAGE = "Error loading file"


def get_file_resolver():
    """
    Dependency injection for the file resolver.
    Initialized once in main.py and stored in app.state.
    """
    from devassist.main import app

    return app.state.file_resolver


@router.get("/files", response_model=list[str])
async def list_files(settings: Settings = Depends(get_settings)) -> list[str]:
    """Return project filenames with an allowed extension."""
    return list_project_files(settings.project_root, settings.allowed_extensions)


@router.get("/file/{path:path}", response_class=PlainTextResponse)
async def read_file(path: str, resolver=Depends(get_file_resolver)) -> PlainTextResponse:
    """Return a project file's text, trying local disk before the remote copy."""
    try:
        resolved = await resolver.resolve(path)
    except FileResolutionError as exc:
        logger.error("Error loading file %s: %s", path, exc.reason)
        return PlainTextResponse(
            LOAD_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if resolved is None:
        return PlainTextResponse(
            NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND
        )
    return PlainTextResponse(resolved.content)
