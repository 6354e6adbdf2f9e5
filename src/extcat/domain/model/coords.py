"""Artifact coordinates and the keys used to deduplicate them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_TYPE: Final[str] = "jar"


@dataclass(frozen=True, slots=True)
class ArtifactKey:
    """Version-less artifact identity."""

    group_id: str
    artifact_id: str
    classifier: str = ""
    type: str = DEFAULT_TYPE

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.classifier}:{self.type}"


@dataclass(frozen=True, slots=True)
class ArtifactCoords:
    """Coordinates of one released artifact.

    Two coordinates sharing a ``key`` but differing in ``version`` are two releases
    of the same artifact.
    """

    group_id: str
    artifact_id: str
    version: str
    classifier: str = ""
    type: str = DEFAULT_TYPE

    def __post_init__(self) -> None:
        for name in ("group_id", "artifact_id", "version"):
            if not getattr(self, name):
                raise ValueError(f"Artifact coordinates require a non-empty {name}")

    @property
    def key(self) -> ArtifactKey:
        return ArtifactKey(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            classifier=self.classifier,
            type=self.type,
        )

    @classmethod
    def from_string(cls, value: str) -> ArtifactCoords:
        """Parse ``group:artifact[:classifier[:type]]:version``."""

        parts = value.strip().split(":")
        match parts:
            case [group_id, artifact_id, version]:
                return cls(group_id=group_id, artifact_id=artifact_id, version=version)
            case [group_id, artifact_id, classifier, version]:
                return cls(
                    group_id=group_id,
                    artifact_id=artifact_id,
                    version=version,
                    classifier=classifier,
                )
            case [group_id, artifact_id, classifier, type_, version]:
                return cls(
                    group_id=group_id,
                    artifact_id=artifact_id,
                    version=version,
                    classifier=classifier,
                    type=type_ or DEFAULT_TYPE,
                )
            case _:
                raise ValueError(f"Invalid artifact coordinates: {value!r}")

    def __str__(self) -> str:
        if not self.classifier and self.type == DEFAULT_TYPE:
            return f"{self.group_id}:{self.artifact_id}:{self.version}"
        return f"{self.group_id}:{self.artifact_id}:{self.classifier}:{self.type}:{self.version}"
