"""Classify platform and runtime version queries from registry configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from extcat.domain.model import Classification

if TYPE_CHECKING:
    from extcat.config.registries import RegistryConfig
    from extcat.domain.model import ArtifactCoords


def classify_platform(config: RegistryConfig, bom: ArtifactCoords) -> Classification:
    platforms = config.platforms
    if platforms is None:
        return Classification.RECOGNIZED
    if not platforms.recognizes(bom.group_id):
        return Classification.NOT_RECOGNIZED
    if platforms.exclusive_provider:
        return Classification.EXCLUSIVE_PROVIDER
    return Classification.RECOGNIZED


def classify_runtime_version(config: RegistryConfig, version: str) -> Classification:
    runtime_versions = config.runtime_versions
    if runtime_versions is None:
        return Classification.RECOGNIZED
    if not runtime_versions.recognizes(version):
        return Classification.NOT_RECOGNIZED
    if runtime_versions.exclusive_provider:
        return Classification.EXCLUSIVE_PROVIDER
    return Classification.RECOGNIZED
