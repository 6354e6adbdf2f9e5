"""Pydantic models describing registry catalog documents.

HTTP and directory registries serve the same JSON documents; keys are
kebab-case and unknown keys are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PlatformPayload(RegistryBaseModel):
    bom: str
    runtime_core_version: str = Field(alias="runtime-core-version")
    upstream_runtime_core_version: str | None = Field(
        default=None, alias="upstream-runtime-core-version"
    )

    _normalize_upstream = field_validator("upstream_runtime_core_version", mode="before")(
        _blank_to_none
    )


class PlatformCatalogPayload(RegistryBaseModel):
    default_platform: str | None = Field(default=None, alias="default-platform")
    platforms: list[PlatformPayload] = Field(default_factory=list)

    _normalize_default = field_validator("default_platform", mode="before")(_blank_to_none)


class CategoryPayload(RegistryBaseModel):
    id: str
    name: str
    description: str | None = None


class ExtensionPayload(RegistryBaseModel):
    artifact: str
    name: str
    description: str | None = None
    metadata: dict[str, object] = Field(default_factory=dict)
    origins: list[str] = Field(default_factory=list)


class ExtensionCatalogPayload(RegistryBaseModel):
    id: str
    bom: str | None = None
    platform: bool = False
    runtime_core_version: str | None = Field(default=None, alias="runtime-core-version")
    upstream_runtime_core_version: str | None = Field(
        default=None, alias="upstream-runtime-core-version"
    )
    extensions: list[ExtensionPayload] = Field(default_factory=list)
    categories: list[CategoryPayload] = Field(default_factory=list)
    metadata: dict[str, object] = Field(default_factory=dict)

    _normalize_bom = field_validator("bom", mode="before")(_blank_to_none)
    _normalize_upstream = field_validator("upstream_runtime_core_version", mode="before")(
        _blank_to_none
    )
