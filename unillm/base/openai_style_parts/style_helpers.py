"""Payload helpers for OpenAI-compatible Chat Completions.

Shared by the OpenAI, OpenRouter, DeepSeek and xAI adapters, which differ only
in which parameters they accept.
"""
from __future__ import annotations

from typing import Any, Dict, List

from ..models import GenerationParams, UnifiedRequest

# Unified parameter name → Chat Completions field name.
_PARAM_FIELDS = {
    "temperature": "temperature",
    "max_tokens": "max_tokens",
    "top_p": "top_p",
    "top_k": "top_k",
    "presence_penalty": "presence_penalty",
    "frequency_penalty": "frequency_penalty",
    "seed": "seed",
}


def build_messages(request: UnifiedRequest) -> List[Dict[str, str]]:
    """Map unified messages 1:1 to Chat Completions messages."""
    return [{"role": m.role, "content": m.content} for m in request.messages]


def build_params(params: GenerationParams) -> Dict[str, Any]:
    """Return the wire fields for the parameters that were set."""
    out: Dict[str, Any] = {}
    for name, value in params.specified().items():
        if name == "stop":
            out["stop"] = list(value)
        else:
            out[_PARAM_FIELDS[name]] = value
    return out


def build_chat_payload(request: UnifiedRequest, *, include_usage: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": build_messages(request),
    }
    payload.update(build_params(request.params))
    if request.stream:
        payload["stream"] = True
        if include_usage:
            payload["stream_options"] = {"include_usage": True}
    return payload


__all__ = ["build_messages", "build_params", "build_chat_payload"]
