"""
OpenRouter adapter.

OpenRouter speaks the OpenAI Chat Completions format and forwards ``top_k``
to the routed model, so it accepts the one parameter OpenAI rejects.
"""
from __future__ import annotations

from ..config.provider_config import ProviderKind
from ..base.openai_style_parts import OpenAIStyleAdapter


class OpenRouterAdapter(OpenAIStyleAdapter):
    kind = ProviderKind.OPENROUTER
    unsupported_params = frozenset()


__all__ = ["OpenRouterAdapter"]
