"""
Provider-agnostic interfaces (Protocols) for adapters.

Re-exports Protocols split into single-class modules under
``unillm.base.interfaces_parts`` while keeping imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ModelListingAdapter, ProviderAdapter

__all__ = [
    "ProviderAdapter",
    "ModelListingAdapter",
]
