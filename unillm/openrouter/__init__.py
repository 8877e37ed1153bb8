"""OpenRouter provider package."""

from .client import OpenRouterAdapter

__all__ = ["OpenRouterAdapter"]
