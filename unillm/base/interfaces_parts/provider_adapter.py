"""ProviderAdapter Protocol (single-class module).

Defines the translation contract between the unified model and one
provider's wire format.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..errors import ProviderError
from ..models import RawResponse, StreamChunk, UnifiedRequest, UnifiedResponse, WireRequest


@runtime_checkable
class ProviderAdapter(Protocol):
    """Minimal interface every provider adapter implements.

    Implementations never perform I/O. ``serialize`` raises
    ``UnsupportedParameter`` for anything the provider cannot express;
    ``deserialize`` raises ``ProviderError`` for error statuses and
    ``MalformedResponse`` for unparseable bodies.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""
        ...

    @property
    def stream_format(self) -> str:
        """Record framing of the provider's stream: ``"sse"`` or ``"ndjson"``."""
        ...

    def serialize(self, request: UnifiedRequest) -> WireRequest:
        ...

    def deserialize(self, raw: RawResponse) -> UnifiedResponse:
        ...

    def begin_stream(self, request: UnifiedRequest) -> None:
        """Reset per-stream decoding state before the first record."""
        ...

    def deserialize_chunk(self, record: bytes) -> Optional[StreamChunk]:
        """Decode one framed stream record.

        Returns ``None`` for keep-alives, comments and events that carry no
        text and are not terminal.
        """
        ...

    def parse_error(self, raw: RawResponse) -> ProviderError:
        ...
