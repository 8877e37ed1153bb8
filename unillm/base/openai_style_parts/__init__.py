"""OpenAI-compatible adapter parts shared by several providers."""

from .base import DONE_SENTINEL, OPENAI_FINISH_REASONS, OpenAIStyleAdapter
from .style_helpers import build_chat_payload, build_messages, build_params

__all__ = [
    "DONE_SENTINEL",
    "OPENAI_FINISH_REASONS",
    "OpenAIStyleAdapter",
    "build_chat_payload",
    "build_messages",
    "build_params",
]
