"""Port for combining partial extension catalogs into one."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from extcat.domain.model import ExtensionCatalog

CatalogMerger = Callable[[Sequence[ExtensionCatalog]], ExtensionCatalog]

__all__ = ["CatalogMerger"]
