"""
Exception hierarchy shared by the relay services.

Routers convert these into HTTP responses at the boundary; services never
build responses themselves.
"""


class DevAssistError(Exception):
    """Base class for relay errors."""


class FileResolutionError(DevAssistError):
    """A file lookup failed for a reason other than the file being absent."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error loading file {path}: {reason}")
        self.path = path
        self.reason = reason


class ProviderError(DevAssistError):
    """The LLM provider call failed or returned an unusable response."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details
