"""Combine several registries' platform catalogs into one."""

from __future__ import annotations

from typing import TYPE_CHECKING

from extcat.domain.model import PlatformCatalog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from extcat.domain.model import ArtifactKey, Platform


def merge_platform_catalogs(catalogs: Sequence[PlatformCatalog]) -> PlatformCatalog:
    """Merge ``catalogs`` in registry order.

    The first catalog's default platform is kept. A platform whose BOM key was
    already contributed by an earlier catalog is dropped.
    """

    if not catalogs:
        return PlatformCatalog()

    seen: set[ArtifactKey] = set()
    platforms: list[Platform] = []
    for catalog in catalogs:
        for platform in catalog.platforms:
            key = platform.bom.key
            if key in seen:
                continue
            seen.add(key)
            platforms.append(platform)

    return PlatformCatalog(
        platforms=tuple(platforms),
        default_platform=catalogs[0].default_platform,
    )
