"""unillm.config.env
=================

Centralized environment variable mapping for provider credentials.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Some providers (e.g., Gemini)
  historically support multiple env var names; list those in ``ENV_ALIASES``
  with the canonical name first to establish precedence.
- Ollama runs locally without a credential and has no entry.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and the caller decides (``ProviderConfig.require_api_key`` raises
``ConfigError``).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "xai": "XAI_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

# Config field → environment suffix, read as ``<KIND>_<SUFFIX>``.
ENV_FIELD_MAP: Dict[str, str] = {
    "endpoint": "BASE_URL",
    "api_key_env": "API_KEY_ENV",
    "timeout_seconds": "TIMEOUT_SECONDS",
    "max_attempts": "MAX_ATTEMPTS",
}


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical credential env var name for a provider, if any."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider.

    The canonical name is yielded first, followed by any aliases.
    """
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):  # pragma: no branch - small tuples
        if alias != canonical:
            yield alias


def resolve_env_key(names: Iterable[str]) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty variable.

    ``(None, None)`` when none of ``names`` is set.
    """
    for name in names:
        if val := os.environ.get(name):
            return val, name
    return None, None


def env_overrides(provider: str) -> Dict[str, str]:
    """Collect ``<KIND>_<SUFFIX>`` environment values for ``provider``."""
    out: Dict[str, str] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "ENV_FIELD_MAP",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_env_key",
    "env_overrides",
]
