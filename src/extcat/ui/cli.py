from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from extcat.adapters.registry import dump_extension_catalog, dump_platform_catalog
from extcat.app import build_catalog_resolver, resolve_extension_catalog, resolve_platform_catalog
from extcat.config import ConfigurationError, configure_logging, get_registries_config
from extcat.domain.errors import RegistryResolutionError
from extcat.domain.model import ArtifactCoords

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from extcat.config import RegistriesConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve platform and extension catalogs from configured registries"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Registry configuration file (defaults to EXTCAT_CONFIG or the user config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("registries", help="List configured registries")

    platforms = subparsers.add_parser("platforms", help="Show the platforms of all registries")
    platforms.add_argument(
        "--runtime-version",
        type=str,
        help="Only platforms aligned on this runtime core version",
    )

    extensions = subparsers.add_parser("extensions", help="Resolve the extension catalog")
    selection = extensions.add_mutually_exclusive_group()
    selection.add_argument(
        "--runtime-version",
        type=str,
        help="Runtime core version to resolve extensions for",
    )
    selection.add_argument(
        "--platform",
        dest="platforms",
        action="append",
        type=_parse_coords,
        metavar="COORDS",
        help="Platform BOM coordinates (group:artifact[:classifier[:type]]:version); repeatable",
    )

    return parser.parse_args(list(argv))


def _parse_coords(value: str) -> ArtifactCoords:
    try:
        return ArtifactCoords.from_string(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _describe_registries(config: RegistriesConfig) -> list[dict[str, object]]:
    described: list[dict[str, object]] = []
    for registry in config.registries:
        entry: dict[str, object] = {"id": registry.id, "enabled": not registry.disabled}
        if registry.url is not None:
            entry["url"] = registry.url
        if registry.path is not None:
            entry["path"] = str(registry.path)
        described.append(entry)
    return described


def _emit(document: object) -> None:
    sys.stdout.write(json.dumps(document, indent=2) + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.INFO)

    try:
        config = get_registries_config(path=parsed_args.config)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    if config.debug and not parsed_args.debug:
        configure_logging(level=logging.DEBUG, force=True)

    if parsed_args.command == "registries":
        _emit(_describe_registries(config))
        return

    resolver = build_catalog_resolver(config)
    try:
        if parsed_args.command == "platforms":
            catalog = resolve_platform_catalog(
                version=parsed_args.runtime_version,
                resolver=resolver,
            )
            _emit(dump_platform_catalog(catalog) if catalog is not None else None)
        else:
            extension_catalog = resolve_extension_catalog(
                version=parsed_args.runtime_version,
                platforms=parsed_args.platforms,
                resolver=resolver,
            )
            _emit(dump_extension_catalog(extension_catalog))
    except RegistryResolutionError as exc:
        log.error("Catalog resolution failed: %s", exc)  # noqa: TRY400
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
