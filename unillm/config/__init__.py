"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URLs, credential env var names).
* Merge sources in a predictable order, later wins:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by UNILLM_CONFIG_FILE
    3. Environment variables (e.g. OPENAI_BASE_URL, OPENAI_MAX_ATTEMPTS)
    4. In-code overrides passed to the loader
* Provide a single call site: ``load_provider_config(kind)``.

Environment Variable Conventions
--------------------------------
<KIND>_BASE_URL, <KIND>_API_KEY_ENV, <KIND>_TIMEOUT_SECONDS, <KIND>_MAX_ATTEMPTS
e.g. OPENROUTER_BASE_URL, ANTHROPIC_MAX_ATTEMPTS.

External Config File (Optional)
-------------------------------
If UNILLM_CONFIG_FILE is set to a path, JSON is tried first, then YAML.
Structure example:

```
openai:
  timeout_seconds: 30
  retry:
    max_attempts: 5
ollama:
  base_url: http://gpu-box:11434
```

Public API
----------
* load_provider_config(kind, overrides=None, **kwargs) -> ProviderConfig
* get_provider_config(kind, overrides=None) -> dict  (merged raw values)
"""
from __future__ import annotations

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

from ..base.errors import ConfigError
from ..base.resilience.retry import RetryPolicy
from .defaults import CONFIG_FILE_ENV, DEFAULT_BASE_URLS
from .env import ENV_MAP, env_overrides
from .provider_config import ProviderConfig, ProviderKind

# Accepted spellings in files and overrides → canonical field name.
_FIELD_ALIASES = {
    "base_url": "endpoint",
    "host": "endpoint",
    "timeout": "timeout_seconds",
}
_RETRY_FIELDS = ("max_attempts", "delay_base", "max_delay")

_FILE_CACHE: Optional[Tuple[str, float, Dict[str, Any]]] = None


def _coerce_kind(kind: Union[str, ProviderKind]) -> ProviderKind:
    try:
        return ProviderKind((kind.value if isinstance(kind, ProviderKind) else str(kind)).lower().strip())
    except ValueError as exc:
        raise ConfigError(f"unknown provider kind {kind!r}", provider=str(kind), field="kind") from exc


def _load_external_config() -> Dict[str, Any]:
    """Return the parsed config file, cached per path and mtime."""
    global _FILE_CACHE  # noqa: PLW0603 - documented module cache
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"config file not found: {path}", field=CONFIG_FILE_ENV)
    mtime = p.stat().st_mtime
    if _FILE_CACHE is not None and _FILE_CACHE[0] == path and _FILE_CACHE[1] == mtime:
        return _FILE_CACHE[2]
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"config file is neither JSON nor YAML: {path}", field=CONFIG_FILE_ENV) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file must hold a mapping of providers: {path}", field=CONFIG_FILE_ENV)
    _FILE_CACHE = (path, mtime, data)
    return data


def clear_config_cache() -> None:
    """Forget the cached config file contents."""
    global _FILE_CACHE  # noqa: PLW0603 - documented module cache
    _FILE_CACHE = None


def _normalize(section: Mapping[str, Any]) -> Dict[str, Any]:
    """Canonicalize field names and gather retry fields under ``retry``."""
    out: Dict[str, Any] = {}
    retry: Dict[str, Any] = {}
    for key, value in section.items():
        if value is None:
            continue
        name = _FIELD_ALIASES.get(key, key)
        if name in _RETRY_FIELDS:
            retry[name] = value
        elif name == "retry":
            retry.update(asdict(value) if isinstance(value, RetryPolicy) else dict(value))
        elif name == "headers":
            out["headers"] = {**out.get("headers", {}), **dict(value)}
        else:
            out[name] = value
    if retry:
        out["retry"] = retry
    return out


def _merge(cfg: Dict[str, Any], layer: Mapping[str, Any]) -> None:
    for key, value in _normalize(layer).items():
        if key in ("retry", "headers") and isinstance(cfg.get(key), dict):
            cfg[key] = {**cfg[key], **value}
        else:
            cfg[key] = value


def get_provider_config(
    kind: Union[str, ProviderKind],
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Return the merged raw configuration values for a provider.

    Merge order (later wins): defaults -> config file -> env vars -> overrides
    """
    pk = _coerce_kind(kind)
    name = pk.value
    cfg: Dict[str, Any] = {"endpoint": DEFAULT_BASE_URLS[name], "retry": {}}
    if name in ENV_MAP:
        cfg["api_key_env"] = ENV_MAP[name]

    file_cfg = _load_external_config().get(name)
    if file_cfg is not None and not isinstance(file_cfg, dict):
        raise ConfigError("config file section must be a mapping", provider=name)
    if file_cfg:
        _merge(cfg, file_cfg)

    _merge(cfg, env_overrides(name))

    if overrides:
        _merge(cfg, overrides)

    if not cfg["retry"]:
        del cfg["retry"]
    return cfg


def load_provider_config(
    kind: Union[str, ProviderKind],
    overrides: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> ProviderConfig:
    """Build a validated, immutable :class:`ProviderConfig`.

    ``overrides`` and keyword arguments are merged last (keyword arguments
    win). Invalid values raise :class:`ConfigError`; the credential value is
    never part of the error message.
    """
    pk = _coerce_kind(kind)
    merged_overrides: Dict[str, Any] = {**(overrides or {}), **kwargs}
    cfg = get_provider_config(pk, merged_overrides)
    cfg.pop("kind", None)
    try:
        return ProviderConfig(kind=pk, **cfg)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid configuration: {exc}", provider=pk.value) from exc


__all__ = [
    "ProviderConfig",
    "ProviderKind",
    "load_provider_config",
    "get_provider_config",
    "clear_config_cache",
]
