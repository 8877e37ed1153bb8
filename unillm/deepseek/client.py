"""
DeepSeek adapter.

OpenAI-compatible wire format. DeepSeek has no ``top_k`` or ``seed`` and
accepts up to 16 stop sequences.
"""
from __future__ import annotations

from ..config.provider_config import ProviderKind
from ..base.openai_style_parts import OpenAIStyleAdapter


class DeepSeekAdapter(OpenAIStyleAdapter):
    kind = ProviderKind.DEEPSEEK
    unsupported_params = frozenset({"top_k", "seed"})
    max_stop_sequences = 16


__all__ = ["DeepSeekAdapter"]
