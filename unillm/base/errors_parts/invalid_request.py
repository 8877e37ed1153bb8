"""Invalid unified request error type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .client_error import ClientError


@dataclass
class InvalidRequest(ClientError, ValueError):
    """Raised when a `UnifiedRequest` violates its own invariants.

    Examples are an empty model identifier, an empty message list or a
    negative ``max_tokens``. Detected at construction, before any adapter or
    network involvement.
    """

    message: str
    field: Optional[str] = None

    def __str__(self) -> str:
        return f"invalid request ({self.field or '-'}): {self.message}"


__all__ = ["InvalidRequest"]
