"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Classification(StrEnum):
    """How a registry answers "do you know about this platform or runtime version?"."""

    NOT_RECOGNIZED = "not_recognized"
    RECOGNIZED = "recognized"
    EXCLUSIVE_PROVIDER = "exclusive_provider"
