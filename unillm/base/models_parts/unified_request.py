"""
UnifiedRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to each provider's wire payload.
The request is immutable: messages are stored as a tuple and the dataclass is
frozen, so one instance can be shared across threads and retries.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from ..errors_parts.invalid_request import InvalidRequest
from .generation_params import GenerationParams
from .message import Message


@dataclass(frozen=True)
class UnifiedRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier (non-empty).
        messages: Ordered role-tagged text segments.
        params: Generation parameters (all optional).
        stream: Whether the caller wants incremental delivery.

    Raises:
        InvalidRequest: When ``model`` is empty or no messages are given.
    """

    model: str
    messages: Tuple[Message, ...]
    params: GenerationParams = field(default_factory=GenerationParams)
    stream: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.model, str) or not self.model.strip():
            raise InvalidRequest("model must be a non-empty string", field="model")
        messages = tuple(self.messages)
        if not messages:
            raise InvalidRequest("at least one message is required", field="messages")
        if not all(isinstance(m, Message) for m in messages):
            raise InvalidRequest("messages must be Message instances", field="messages")
        object.__setattr__(self, "messages", messages)

    @classmethod
    def from_prompt(
        cls,
        model: str,
        prompt: str,
        *,
        system: Optional[str] = None,
        stream: bool = False,
        **params: Any,
    ) -> "UnifiedRequest":
        """Build a single-turn request from a prompt and optional system text."""
        messages = [Message.system(system)] if system else []
        messages.append(Message.user(prompt))
        return cls(model=model, messages=tuple(messages), params=GenerationParams(**params), stream=stream)

    def with_stream(self, stream: bool) -> "UnifiedRequest":
        """Return a copy with the streaming flag set to ``stream``."""
        if self.stream is stream:
            return self
        return replace(self, stream=stream)

    def system_text(self) -> Optional[str]:
        """Return all system messages joined by blank lines, or ``None``."""
        parts = [m.content for m in self.messages if m.role == "system"]
        return "\n\n".join(parts) if parts else None

    def conversation(self) -> Tuple[Message, ...]:
        """Return the non-system turns in order."""
        return tuple(m for m in self.messages if m.role != "system")

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "params": self.params.to_dict(),
            "stream": self.stream,
        }


__all__ = [
    "UnifiedRequest",
]
