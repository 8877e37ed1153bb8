"""ModelListingAdapter Protocol (single-class module).

Interface for adapters that can describe the provider's model listing call.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..models import ModelInfo, RawResponse, WireRequest


@runtime_checkable
class ModelListingAdapter(Protocol):
    """Translate a model-listing call to and from the provider wire format."""

    def serialize_list_models(self) -> WireRequest:
        ...

    def deserialize_models(self, raw: RawResponse) -> List[ModelInfo]:
        """Return the advertised models in provider order."""
        ...
