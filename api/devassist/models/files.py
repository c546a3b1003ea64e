"""
Models for project file resolution.
"""

from dataclasses import dataclass
from enum import Enum


class FileOrigin(str, Enum):
    """Where a resolved file's content came from."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass
class ResolvedFile:
    """A project file found by the resolver."""

    path: str
    content: str
    origin: FileOrigin
