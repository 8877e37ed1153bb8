"""
Token usage counters attached to responses and final stream chunks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _as_count(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be integral, got {value!r}")
        value = int(value)
    if value < 0:
        raise ValueError(f"{name} negative: {value}")
    return value


@dataclass(frozen=True)
class TokenUsage:
    """Prompt/completion/total token counters.

    Counters are optional because not every provider reports all three.
    When prompt and completion are both known, ``total`` equals their sum.

    Raises:
        ValueError: On negative counters or a total that disagrees with
            ``prompt + completion``. Adapters turn this into
            ``MalformedResponse``.
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def __post_init__(self) -> None:
        prompt = _as_count("prompt_tokens", self.prompt_tokens)
        completion = _as_count("completion_tokens", self.completion_tokens)
        total = _as_count("total_tokens", self.total_tokens)
        if prompt is not None and completion is not None:
            if total is None:
                total = prompt + completion
            elif prompt + completion != total:
                raise ValueError(
                    f"total_tokens mismatch: {prompt} + {completion} != {total}"
                )
        object.__setattr__(self, "prompt_tokens", prompt)
        object.__setattr__(self, "completion_tokens", completion)
        object.__setattr__(self, "total_tokens", total)

    @property
    def is_empty(self) -> bool:
        return self.prompt_tokens is None and self.completion_tokens is None and self.total_tokens is None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


__all__ = ["TokenUsage"]
