"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from species_resolver import __version__
from species_resolver.config import get_settings
from species_resolver.ecoregion import classify
from species_resolver.reference.taxa import TAXONOMIC_CLASSES
from species_resolver.service import SpeciesService

CLASS_CHOICES = [t.name for t in TAXONOMIC_CLASSES]


def _add_location(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("lat", type=float, help="Latitude in decimal degrees")
    parser.add_argument("lon", type=float, help="Longitude in decimal degrees")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="species-resolver",
        description="Pick a displayable species for any coordinate",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'select' command - one species for a point
    select_parser = subparsers.add_parser("select", help="Select one species for a location")
    _add_location(select_parser)
    select_parser.add_argument(
        "--class",
        dest="class_hint",
        type=str,
        default=None,
        help="Taxonomic class hint, e.g. birds or bird (default: random)",
    )

    # 'resolve' command - candidate list for one class
    resolve_parser = subparsers.add_parser("resolve", help="List candidates for one class")
    _add_location(resolve_parser)
    resolve_parser.add_argument(
        "--class",
        dest="class_name",
        choices=CLASS_CHOICES,
        default="birds",
        help="Taxonomic class (default: birds)",
    )
    resolve_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Desired candidate count (default: desired_count from settings)",
    )

    # 'survey' command - every class at a point
    survey_parser = subparsers.add_parser("survey", help="Resolve every class at a location")
    _add_location(survey_parser)
    survey_parser.add_argument("--count", type=int, default=None, help="Desired count per class")

    # 'classify' command - ecoregion only, no network
    classify_parser = subparsers.add_parser("classify", help="Show the ecoregion for a location")
    _add_location(classify_parser)

    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_select(args: argparse.Namespace) -> int:
    """Handle the 'select' command."""
    service = SpeciesService()
    result = service.select_species(args.lat, args.lon, args.class_hint)
    print(result.model_dump_json(indent=2))
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handle the 'resolve' command."""
    service = SpeciesService()
    candidates = service.resolve(args.lat, args.lon, args.class_name, args.count)
    for candidate in candidates:
        scientific = f" ({candidate.scientific_name})" if candidate.scientific_name else ""
        print(f"{candidate.name}{scientific} [{candidate.source}]")
    if service.last_upstream_error:
        print(f"Upstream: {service.last_upstream_error}", file=sys.stderr)
    return 0


def cmd_survey(args: argparse.Namespace) -> int:
    """Handle the 'survey' command."""
    service = SpeciesService()
    survey = service.survey(args.lat, args.lon, args.count)
    print(survey.model_dump_json(indent=2))
    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    """Handle the 'classify' command."""
    ecoregion = classify(args.lat, args.lon)
    print(
        json.dumps(
            {
                "name": ecoregion.name,
                "code": ecoregion.code,
                "state": ecoregion.state,
                "region": ecoregion.region_tag or None,
            },
            indent=2,
        )
    )
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Upstream: {settings.gbif_base_url}")
    print(f"No-repeat window: {settings.no_repeat_days:g} days")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    level = logging.DEBUG if args.debug or settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "select": cmd_select,
        "resolve": cmd_resolve,
        "survey": cmd_survey,
        "classify": cmd_classify,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
