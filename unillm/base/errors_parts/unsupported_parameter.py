"""Unsupported request parameter error type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .client_error import ClientError


@dataclass
class UnsupportedParameter(ClientError):
    """Raised by an adapter when the request uses an option it cannot express.

    Adapters raise this during serialization, so it always surfaces before
    any network call is made. It is never retried.

    Attributes:
        provider: Provider kind of the adapter that rejected the request.
        parameter: Name of the unified parameter (e.g. ``"top_k"``).
        reason: Short explanation (e.g. ``"not supported"``, ``"max 4 values"``).
        value: The offending value, when useful for diagnostics.
    """

    provider: str
    parameter: str
    reason: str = "not supported"
    value: Optional[Any] = None

    def __str__(self) -> str:
        return f"{self.provider}: parameter '{self.parameter}' {self.reason}"


__all__ = ["UnsupportedParameter"]
