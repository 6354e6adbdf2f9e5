"""Registry endpoint adapters."""

from __future__ import annotations

from .factory import build_registry_endpoint
from .http import HttpRegistryEndpoint
from .local import LocalRegistryEndpoint
from .translator import dump_extension_catalog, dump_platform_catalog

__all__ = [
    "HttpRegistryEndpoint",
    "LocalRegistryEndpoint",
    "build_registry_endpoint",
    "dump_extension_catalog",
    "dump_platform_catalog",
]
