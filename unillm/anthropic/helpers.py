"""Payload helpers for the Anthropic Messages API."""
from __future__ import annotations

from typing import Any, Dict, List

from ..base.errors import UnsupportedParameter
from ..base.models import GenerationParams, UnifiedRequest
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS

_PARAM_FIELDS = {
    "temperature": "temperature",
    "top_p": "top_p",
    "top_k": "top_k",
}


def build_messages(request: UnifiedRequest) -> List[Dict[str, str]]:
    """Map the non-system turns to Messages API turns.

    Raises:
        UnsupportedParameter: The request has only system messages.
    """
    turns = request.conversation()
    if not turns:
        raise UnsupportedParameter(
            provider="anthropic",
            parameter="messages",
            reason="requires at least one user or assistant message",
        )
    return [{"role": m.role, "content": m.content} for m in turns]


def build_params(params: GenerationParams) -> Dict[str, Any]:
    out: Dict[str, Any] = {"max_tokens": params.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS}
    for name, value in params.specified().items():
        if name == "stop":
            out["stop_sequences"] = list(value)
        elif name in _PARAM_FIELDS:
            out[_PARAM_FIELDS[name]] = value
    return out


def build_messages_payload(request: UnifiedRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": build_messages(request),
    }
    system = request.system_text()
    if system:
        payload["system"] = system
    payload.update(build_params(request.params))
    if request.stream:
        payload["stream"] = True
    return payload


__all__ = ["build_messages", "build_params", "build_messages_payload"]
