"""Payload helpers for the Gemini ``generateContent`` API."""
from __future__ import annotations

from typing import Any, Dict, List

from ..base.errors import UnsupportedParameter
from ..base.models import GenerationParams, UnifiedRequest

MODEL_PREFIX = "models/"

_PARAM_FIELDS = {
    "temperature": "temperature",
    "max_tokens": "maxOutputTokens",
    "top_p": "topP",
    "top_k": "topK",
    "presence_penalty": "presencePenalty",
    "frequency_penalty": "frequencyPenalty",
    "seed": "seed",
}

# Gemini calls the assistant role "model".
_ROLE_MAP = {"user": "user", "assistant": "model"}


def model_path(model: str) -> str:
    """Return ``models/<id>`` for a bare or already-prefixed model id."""
    return model if model.startswith(MODEL_PREFIX) else MODEL_PREFIX + model


def build_contents(request: UnifiedRequest) -> List[Dict[str, Any]]:
    turns = request.conversation()
    if not turns:
        raise UnsupportedParameter(
            provider="gemini",
            parameter="messages",
            reason="requires at least one user or assistant message",
        )
    return [{"role": _ROLE_MAP[m.role], "parts": [{"text": m.content}]} for m in turns]


def build_generation_config(params: GenerationParams) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, value in params.specified().items():
        if name == "stop":
            out["stopSequences"] = list(value)
        else:
            out[_PARAM_FIELDS[name]] = value
    return out


def build_generate_payload(request: UnifiedRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"contents": build_contents(request)}
    system = request.system_text()
    if system:
        payload["systemInstruction"] = {"parts": [{"text": system}]}
    generation_config = build_generation_config(request.params)
    if generation_config:
        payload["generationConfig"] = generation_config
    return payload


__all__ = [
    "MODEL_PREFIX",
    "model_path",
    "build_contents",
    "build_generation_config",
    "build_generate_payload",
]
