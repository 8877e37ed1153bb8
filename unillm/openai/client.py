"""
OpenAI adapter (Chat Completions wire format).

Accepts temperature in [0, 2] and up to four stop sequences; ``top_k`` is
rejected. Authentication is a bearer token.
"""
from __future__ import annotations

from ..base.openai_style_parts import OpenAIStyleAdapter
from ..config.provider_config import ProviderKind


class OpenAIAdapter(OpenAIStyleAdapter):
    kind = ProviderKind.OPENAI


__all__ = ["OpenAIAdapter"]
