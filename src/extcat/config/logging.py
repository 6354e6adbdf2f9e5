"""Logging setup for the extcat command line."""

from __future__ import annotations

import logging
import sys
from typing import Final

# HTTP stack loggers; their per-request records only matter when debugging
HTTP_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore", "hishel")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Log to stderr so stdout carries nothing but catalog JSON.

    Records of the HTTP client libraries are only shown at DEBUG ``level``.
    """

    logging.basicConfig(
        level=level,
        format="%(levelname)-7s %(name)s: %(message)s",
        stream=sys.stderr,
        force=force,
    )
    http_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
