"""
xAI (Grok) adapter.

OpenAI-compatible wire format; ``top_k`` is not accepted.
"""
from __future__ import annotations

from ..config.provider_config import ProviderKind
from ..base.openai_style_parts import OpenAIStyleAdapter


class XAIAdapter(OpenAIStyleAdapter):
    kind = ProviderKind.XAI
    unsupported_params = frozenset({"top_k"})


__all__ = ["XAIAdapter"]
