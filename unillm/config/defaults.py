"""unillm.config.defaults
======================

Central place for small, stable default values used by the configuration
layer: provider base URLs, the Anthropic API version header and the config
file variable. These can be overridden via environment variables, a config
file or explicit overrides.

This module avoids importing from other unillm packages to prevent circular
dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider base URLs ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# ---- Anthropic ----
# Sent as the ``anthropic-version`` header on every request.
ANTHROPIC_API_VERSION = "2023-06-01"
# The Messages API requires max_tokens; used when the request leaves it unset.
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024

# Environment variable naming the optional JSON/YAML config file.
CONFIG_FILE_ENV = "UNILLM_CONFIG_FILE"

DEFAULT_BASE_URLS = {
    "openai": OPENAI_DEFAULT_BASE_URL,
    "openrouter": OPENROUTER_DEFAULT_BASE_URL,
    "deepseek": DEEPSEEK_DEFAULT_BASE_URL,
    "xai": XAI_DEFAULT_BASE_URL,
    "anthropic": ANTHROPIC_DEFAULT_BASE_URL,
    "gemini": GEMINI_DEFAULT_BASE_URL,
    "ollama": OLLAMA_DEFAULT_HOST,
}
