"""Malformed provider response error type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .client_error import ClientError


@dataclass
class MalformedResponse(ClientError):
    """Raised when a provider response cannot be parsed into the unified model.

    Covers non-JSON bodies, missing required fields, inconsistent token usage
    and streams that end before their terminal record. Never retried.

    Attributes:
        message: What was wrong.
        provider: Provider kind whose adapter rejected the payload.
        body_excerpt: Leading part of the offending body (bounded length).
    """

    message: str
    provider: str
    body_excerpt: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.provider}: malformed response: {self.message}"


__all__ = ["MalformedResponse"]
