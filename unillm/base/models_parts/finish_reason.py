"""Normalized reasons a generation stopped."""
from __future__ import annotations

from enum import Enum


class FinishReason(str, Enum):
    COMPLETED = "completed"
    LENGTH = "length"
    STOP_SEQUENCE = "stop_sequence"
    CONTENT_FILTER = "content_filter"
    ERROR = "error"


__all__ = ["FinishReason"]
