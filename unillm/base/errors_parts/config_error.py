"""Configuration error type (invalid or missing provider configuration)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .client_error import ClientError


@dataclass
class ConfigError(ClientError):
    """Raised when a `ProviderConfig` is invalid, incomplete or unresolvable.

    Attributes:
        message: Human-readable description of the problem.
        provider: Provider kind the configuration was meant for, when known.
        field: Offending configuration field, when known.
    """

    message: str
    provider: Optional[str] = None
    field: Optional[str] = None

    def __str__(self) -> str:
        where = f"{self.provider or '-'}"
        if self.field:
            where = f"{where}.{self.field}"
        return f"config error ({where}): {self.message}"


__all__ = ["ConfigError"]
