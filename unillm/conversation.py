"""In-memory chat session on top of :class:`UnifiedClient`.

A ``Conversation`` keeps an optional primer (system message) plus the turn
history and sends the whole history with every question. History changes
only after a call succeeds, so a failed ``ask`` leaves it untouched.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .base.models import GenerationParams, Message, UnifiedRequest
from .client import UnifiedClient
from .config.provider_config import ProviderConfig


class Conversation:
    """Multi-turn chat state for one provider and model.

    Parameters:
        client: Client used for every call.
        config: Provider configuration.
        model: Model identifier.
        primer: Optional system message placed before every history.
        params: Generation parameters applied to every turn.
    """

    def __init__(
        self,
        client: UnifiedClient,
        config: ProviderConfig,
        model: str,
        primer: Optional[str] = None,
        params: Optional[GenerationParams] = None,
    ) -> None:
        self._client = client
        self._config = config
        self._model = model
        self._primer = primer
        self._params = params or GenerationParams()
        self._history: List[Message] = []

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Primer (when set) followed by the recorded turns."""
        head = (Message.system(self._primer),) if self._primer else ()
        return head + tuple(self._history)

    @property
    def last_message(self) -> Optional[Message]:
        return self._history[-1] if self._history else None

    @property
    def primer(self) -> Optional[str]:
        return self._primer

    def set_primer(self, primer: Optional[str]) -> "Conversation":
        self._primer = primer or None
        return self

    def clear(self) -> "Conversation":
        """Drop the recorded turns; the primer is kept."""
        self._history.clear()
        return self

    def _request(self, text: str, stream: bool) -> UnifiedRequest:
        return UnifiedRequest(
            model=self._model,
            messages=self.messages + (Message.user(text),),
            params=self._params,
            stream=stream,
        )

    def _record(self, text: str, answer: str) -> None:
        self._history.append(Message.user(text))
        self._history.append(Message.assistant(answer))

    def ask(self, text: str, *, persist: bool = True) -> str:
        """Send ``text`` with the history and return the reply text.

        With ``persist=False`` the exchange is not recorded.
        """
        response = self._client.complete(self._config, self._request(text, stream=False))
        if persist:
            self._record(text, response.text)
        return response.text

    def ask_stream(self, text: str, *, persist: bool = True) -> Iterator[str]:
        """Yield reply deltas; the exchange is recorded once the stream completes."""
        chunks = self._client.stream(self._config, self._request(text, stream=True))
        parts: List[str] = []
        completed = False
        try:
            for chunk in chunks:
                if chunk.delta:
                    parts.append(chunk.delta)
                    yield chunk.delta
                if chunk.is_final:
                    completed = True
                    break
        finally:
            chunks.close()
        if completed and persist:
            self._record(text, "".join(parts))


__all__ = ["Conversation"]
