"""
Immutable provider configuration.

``ProviderConfig`` is created once (usually through
:func:`unillm.config.load_provider_config`) and shared read-only by every
call. The credential is held as a ``SecretStr`` so it never shows up in
``repr``, logs or dumps.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_serializer, field_validator

from ..base.errors import ConfigError
from ..base.resilience.retry import RetryPolicy
from ..base.timeouts import get_timeout_config
from .env import get_env_var_candidates, get_env_var_name, resolve_env_key


class ProviderKind(str, Enum):
    """Closed set of supported providers."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    DEEPSEEK = "deepseek"
    XAI = "xai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OLLAMA = "ollama"


# Providers reachable without a credential.
_KEYLESS = frozenset({ProviderKind.OLLAMA})


def _default_timeout() -> float:
    return get_timeout_config().http_timeout_seconds


class ProviderConfig(BaseModel):
    """Connection settings for one provider.

    Attributes:
        kind: Which adapter handles requests.
        endpoint: Base URL; adapters append their paths.
        api_key: Explicit credential (optional when ``api_key_env`` is set).
        api_key_env: Name of the environment variable holding the credential.
        timeout_seconds: Per-request timeout.
        retry: Retry budget and backoff for retryable failures.
        headers: Extra static headers sent with every request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ProviderKind
    endpoint: str
    api_key: Optional[SecretStr] = None
    api_key_env: Optional[str] = None
    timeout_seconds: float = Field(default_factory=_default_timeout, gt=0)
    retry: RetryPolicy = Field(default_factory=RetryPolicy)
    headers: Mapping[str, str] = Field(default_factory=dict)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            kind = data.get("kind")
            first = exc.errors()[0] if exc.errors() else {}
            loc = ".".join(str(p) for p in first.get("loc", ())) or None
            raise ConfigError(
                f"invalid configuration: {first.get('msg', 'validation failed')}",
                provider=getattr(kind, "value", kind) if kind is not None else None,
                field=loc,
            ) from exc

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("headers")
    @classmethod
    def _freeze_headers(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_serializer("headers")
    def _dump_headers(self, v: Mapping[str, str]) -> dict:
        return dict(v)

    @property
    def requires_credential(self) -> bool:
        return self.kind not in _KEYLESS

    def resolve_api_key(self) -> Optional[str]:
        """Return the credential, reading the environment at call time.

        An explicit ``api_key`` wins. Otherwise ``api_key_env`` is read; when it
        names the provider's canonical variable, known aliases are tried too
        (``GOOGLE_API_KEY`` for Gemini).
        """
        if self.api_key is not None:
            value = self.api_key.get_secret_value()
            if value:
                return value
        if not self.api_key_env:
            return None
        names = [self.api_key_env]
        if self.api_key_env == get_env_var_name(self.kind.value):
            names = list(get_env_var_candidates(self.kind.value))
        value, _ = resolve_env_key(names)
        return value

    def require_api_key(self) -> Optional[str]:
        """Like :meth:`resolve_api_key` but raise when a required key is missing.

        Raises:
            ConfigError: The provider needs a credential and none resolves.
        """
        key = self.resolve_api_key()
        if key is None and self.requires_credential:
            source = f"environment variable {self.api_key_env}" if self.api_key_env else "api_key"
            raise ConfigError(
                f"missing credential: set {source}",
                provider=self.kind.value,
                field="api_key",
            )
        return key


__all__ = ["ProviderKind", "ProviderConfig"]
