"""Adapter Factory utilities.

Purpose
-------
Centralize creation of provider adapters from a ``ProviderConfig``. Adapters
are imported lazily using ``importlib`` so importing the facade does not pull
in every provider module.

Scope
-----
Supported kinds: ``openai``, ``openrouter``, ``deepseek``, ``xai``,
``anthropic``, ``gemini`` and ``ollama``. The mapping is total over
``ProviderKind`` and never falls back to a default provider: a kind without
an entry is a configuration error.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple, Type

from ..config.provider_config import ProviderConfig, ProviderKind
from .adapter import BaseAdapter
from .errors import ConfigError


class AdapterFactory:
    """Create provider adapters based on ``ProviderConfig.kind``.

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - One adapter instance per call; adapters hold per-stream decoding state.
    """

    # Map provider kinds to import paths and class names
    _ADAPTERS: Dict[ProviderKind, Dict[str, str]] = {
        ProviderKind.OPENAI: {"module": "unillm.openai.client", "class": "OpenAIAdapter"},
        ProviderKind.OPENROUTER: {"module": "unillm.openrouter.client", "class": "OpenRouterAdapter"},
        ProviderKind.DEEPSEEK: {"module": "unillm.deepseek.client", "class": "DeepSeekAdapter"},
        ProviderKind.XAI: {"module": "unillm.xai.client", "class": "XAIAdapter"},
        ProviderKind.ANTHROPIC: {"module": "unillm.anthropic.client", "class": "AnthropicAdapter"},
        ProviderKind.GEMINI: {"module": "unillm.gemini.client", "class": "GeminiAdapter"},
        ProviderKind.OLLAMA: {"module": "unillm.ollama.client", "class": "OllamaAdapter"},
    }

    @classmethod
    def adapter_class(cls, kind: ProviderKind) -> Type[BaseAdapter]:
        """Resolve the adapter class for ``kind``.

        Raises
        ------
        ConfigError
            If ``kind`` has no registered adapter or the adapter cannot be
            imported.
        """
        entry = cls._ADAPTERS.get(kind)
        if not entry:
            raise ConfigError(f"no adapter registered for provider kind {kind!r}", field="kind")
        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - packaging failure path
            raise ConfigError(
                f"failed to import module '{module_path}' for provider '{kind.value}': {exc}",
                provider=kind.value,
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - packaging failure path
            raise ConfigError(
                f"adapter class '{class_name}' not found in '{module_path}'",
                provider=kind.value,
            ) from exc

    @classmethod
    def create(cls, config: ProviderConfig) -> BaseAdapter:
        """Create a fresh adapter bound to ``config``."""
        return cls.adapter_class(config.kind)(config)

    @classmethod
    def supported(cls) -> Tuple[ProviderKind, ...]:
        """Return the registered provider kinds in deterministic order."""
        return tuple(cls._ADAPTERS.keys())


def create_adapter(config: ProviderConfig) -> BaseAdapter:
    """Shortcut for :meth:`AdapterFactory.create`."""
    return AdapterFactory.create(config)


__all__ = ["AdapterFactory", "create_adapter"]
