"""Domain port definitions for adapters."""

from __future__ import annotations

from .merging import CatalogMerger
from .registry import RegistryEndpoint

__all__ = [
    "CatalogMerger",
    "RegistryEndpoint",
]
