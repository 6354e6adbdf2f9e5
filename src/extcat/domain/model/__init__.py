"""Domain model for platform and extension catalogs."""

from __future__ import annotations

from .catalog import Category, Extension, ExtensionCatalog, Platform, PlatformCatalog
from .coords import ArtifactCoords, ArtifactKey
from .enums import Classification

__all__ = [
    "ArtifactCoords",
    "ArtifactKey",
    "Category",
    "Classification",
    "Extension",
    "ExtensionCatalog",
    "Platform",
    "PlatformCatalog",
]
