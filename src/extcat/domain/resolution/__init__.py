"""Resolution of unified catalogs across ordered registries.

Layered flow:
1) filter registries authoritative for a platform or runtime core version
2) walk upstream runtime core version links, collecting platform catalogs
3) aggregate platform catalogs when several registries contribute
4) append non-platform extensions and merge everything into one catalog
"""

from __future__ import annotations

from .aggregation import merge_platform_catalogs
from .filtering import filter_endpoints
from .merge import merge_extension_catalogs
from .resolver import CatalogResolver
from .walker import VersionGraphWalker

__all__ = [
    "CatalogResolver",
    "VersionGraphWalker",
    "filter_endpoints",
    "merge_extension_catalogs",
    "merge_platform_catalogs",
]
