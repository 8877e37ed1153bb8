"""
Wire-level envelopes exchanged between adapters and the transport.

``WireRequest`` is what an adapter produces from a ``UnifiedRequest``;
``RawResponse`` is what the transport hands back for a single-shot call.
Neither type knows anything about a particular provider.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class WireRequest:
    """Provider-specific HTTP request description.

    Attributes:
        path: Path appended to the configured endpoint (may carry a query).
        payload: JSON object body, or ``None`` for body-less requests.
        headers: Provider headers, including the credential header.
        method: HTTP method.
    """

    path: str
    payload: Optional[Dict[str, Any]] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str = "POST"

    def body(self) -> Optional[bytes]:
        if self.payload is None:
            return None
        return json.dumps(self.payload, ensure_ascii=False).encode("utf-8")

    def url(self, endpoint: str) -> str:
        return endpoint.rstrip("/") + "/" + self.path.lstrip("/")


@dataclass(frozen=True)
class RawResponse:
    """Complete HTTP response as returned by the transport."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))

    def excerpt(self, limit: int = 200) -> str:
        return self.body[:limit].decode("utf-8", errors="replace")


__all__ = ["WireRequest", "RawResponse"]
