"""
Conversation state owned by the chat widget.
"""

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ChatMessage:
    """One transcript entry."""

    role: Role
    text: str

    @property
    def label(self) -> str:
        return "You" if self.role is Role.USER else "AI"


@dataclass
class ChatSession:
    """
    Transcript and panel state for one widget.

    The panel starts minimized. Any assistant entry expands it; ``toggle``
    flips it regardless of message arrival.
    """

    transcript: list[ChatMessage] = field(default_factory=list)
    busy: bool = False
    minimized: bool = True
    draft: str = ""

    def add_message(self, role: Role, text: str) -> ChatMessage:
        message = ChatMessage(role=role, text=text)
        self.transcript.append(message)
        if role is Role.ASSISTANT:
            self.minimized = False
        return message

    def toggle(self) -> bool:
        """Flip minimized/expanded and return the new minimized state."""
        self.minimized = not self.minimized
        return self.minimized
