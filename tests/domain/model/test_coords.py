from __future__ import annotations

import pytest

from extcat.domain.model import ArtifactCoords, ArtifactKey


def test_from_string_parses_short_form() -> None:
    bom = ArtifactCoords.from_string("io.acme.platform:acme-bom:2.1.0")

    assert bom.group_id == "io.acme.platform"
    assert bom.artifact_id == "acme-bom"
    assert bom.version == "2.1.0"
    assert bom.classifier == ""
    assert bom.type == "jar"


def test_from_string_parses_full_form_with_empty_classifier() -> None:
    bom = ArtifactCoords.from_string("io.acme.platform:acme-bom::pom:2.1.0")

    assert bom.classifier == ""
    assert bom.type == "pom"
    assert str(bom) == "io.acme.platform:acme-bom::pom:2.1.0"


def test_from_string_parses_classifier_form() -> None:
    artifact = ArtifactCoords.from_string("io.acme:acme-core:tests:1.0")

    assert artifact.classifier == "tests"
    assert artifact.type == "jar"
    assert str(artifact) == "io.acme:acme-core:tests:jar:1.0"


@pytest.mark.parametrize("value", ["io.acme", "io.acme:core", "a:b:c:d:e:f", "io.acme:core:"])
def test_from_string_rejects_malformed_values(value: str) -> None:
    with pytest.raises(ValueError):
        ArtifactCoords.from_string(value)


def test_key_ignores_version() -> None:
    older = ArtifactCoords.from_string("io.acme:acme-core:1.0")
    newer = ArtifactCoords.from_string("io.acme:acme-core:2.0")

    assert older != newer
    assert older.key == newer.key
    assert older.key == ArtifactKey(group_id="io.acme", artifact_id="acme-core")
