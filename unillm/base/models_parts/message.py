"""
Message DTO used across providers.

Defines the immutable `Message` dataclass and the `Role` literal representing
the sender role. Adapters map these to each provider's own turn shape (for
example Anthropic's top-level ``system`` field or Gemini's ``model`` role).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from ..errors_parts.invalid_request import InvalidRequest


# Message roles used across providers.
Role = Literal["system", "user", "assistant"]

ROLES: Tuple[str, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """A role-tagged text segment of a conversation.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text content.

    Raises:
        InvalidRequest: When ``role`` is not one of :data:`ROLES` or
            ``content`` is not a string.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise InvalidRequest(f"unknown role {self.role!r}", field="messages.role")
        if not isinstance(self.content, str):
            raise InvalidRequest("message content must be a string", field="messages.content")

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
