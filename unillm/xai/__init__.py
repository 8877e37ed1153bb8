"""xAI provider package."""

from .client import XAIAdapter

__all__ = ["XAIAdapter"]
