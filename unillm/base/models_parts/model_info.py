"""
ModelInfo DTO describing a model advertised by a provider's listing endpoint.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """Provider model descriptor.

    Attributes:
        id: Model identifier accepted as ``UnifiedRequest.model``.
        provider: Provider kind that listed the model.
        owned_by: Owner/organization when reported.
        context_length: Context window in tokens when reported.
        metadata: Any further provider fields (opaque).
    """

    id: str
    provider: str
    owned_by: Optional[str] = None
    context_length: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ModelInfo"]
