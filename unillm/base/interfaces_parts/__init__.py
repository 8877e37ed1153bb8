"""Single-class Protocol modules re-exported by ``unillm.base.interfaces``."""

from .provider_adapter import ProviderAdapter
from .model_listing_adapter import ModelListingAdapter

__all__ = ["ProviderAdapter", "ModelListingAdapter"]
