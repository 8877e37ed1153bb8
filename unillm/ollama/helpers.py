"""Ollama helpers module.

Purpose:
- Side-effect-free payload construction for the local Ollama daemon's
  ``/api/chat`` endpoint. Sampling parameters live under ``options``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.models import GenerationParams, UnifiedRequest

_OPTION_FIELDS = {
    "temperature": "temperature",
    "max_tokens": "num_predict",
    "top_p": "top_p",
    "top_k": "top_k",
    "presence_penalty": "presence_penalty",
    "frequency_penalty": "frequency_penalty",
    "seed": "seed",
}


def build_messages(request: UnifiedRequest) -> List[Dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in request.messages]


def build_options(params: GenerationParams) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, value in params.specified().items():
        if name == "stop":
            out["stop"] = list(value)
        else:
            out[_OPTION_FIELDS[name]] = value
    return out


def build_chat_payload(request: UnifiedRequest) -> Dict[str, Any]:
    """Return the ``/api/chat`` body; ``stream`` is always explicit since Ollama defaults to true."""
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": build_messages(request),
        "stream": bool(request.stream),
    }
    options = build_options(request.params)
    if options:
        payload["options"] = options
    return payload


__all__ = ["build_messages", "build_options", "build_chat_payload"]
