"""
GenerationParams DTO: provider-agnostic sampling and length controls.

Every field is optional; ``None`` means "use the provider default" and the
adapter leaves it off the wire. A field that is set must be expressible by
the target provider or the adapter raises ``UnsupportedParameter``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from ..errors_parts.invalid_request import InvalidRequest


def _coerce_stop(value: Union[None, str, Iterable[str]]) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    stops = (value,) if isinstance(value, str) else tuple(value)
    if not all(isinstance(s, str) and s for s in stops):
        raise InvalidRequest("stop sequences must be non-empty strings", field="stop")
    return stops


@dataclass(frozen=True)
class GenerationParams:
    """Normalized generation parameters.

    Attributes:
        temperature: Sampling temperature (``>= 0``).
        max_tokens: Completion length cap (``> 0``).
        top_p: Nucleus sampling mass in ``[0, 1]``.
        top_k: Top-k sampling cutoff (``> 0``).
        stop: Stop sequences; a single string is accepted and wrapped.
        presence_penalty: Presence penalty.
        frequency_penalty: Frequency penalty.
        seed: Sampling seed for best-effort determinism.
    """

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    stop: Optional[Tuple[str, ...]] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stop", _coerce_stop(self.stop))
        for name in ("temperature", "top_p", "presence_penalty", "frequency_penalty"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value)):
                raise InvalidRequest(f"{name} must be a finite number", field=name)
        if self.temperature is not None and self.temperature < 0:
            raise InvalidRequest("temperature must be >= 0", field="temperature")
        if self.top_p is not None and not 0 <= self.top_p <= 1:
            raise InvalidRequest("top_p must be within [0, 1]", field="top_p")
        for name in ("max_tokens", "top_k"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value <= 0):
                raise InvalidRequest(f"{name} must be a positive integer", field=name)
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidRequest("seed must be an integer", field="seed")
        if self.stop is not None and not self.stop:
            object.__setattr__(self, "stop", None)

    def specified(self) -> Dict[str, Any]:
        """Return only the parameters that were explicitly set."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if data["stop"] is not None:
            data["stop"] = list(data["stop"])
        return data


__all__ = ["GenerationParams"]
