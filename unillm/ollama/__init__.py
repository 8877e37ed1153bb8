"""Ollama provider package."""

from .client import OllamaAdapter

__all__ = ["OllamaAdapter"]
