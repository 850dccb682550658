"""Command-line entry point: evaluate a scraped listing from JSON files."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from property_checklist.config import Settings
from property_checklist.engine import evaluate_property
from property_checklist.logging import configure_logging, get_logger
from property_checklist.models import ExtractedPropertyData, PremiumData

logger = get_logger(__name__)


def _read_json(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="property-checklist",
        description="Property checklist - score a listing and list questions for the agent",
    )
    parser.add_argument(
        "listing",
        type=Path,
        help="JSON file with the scraped listing fields",
    )
    parser.add_argument(
        "--premium",
        type=Path,
        default=None,
        help="JSON file with premium street data for the listing",
    )
    parser.add_argument(
        "--premium-loading",
        action="store_true",
        help="Mark premium items as still loading",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines on stderr",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging for troubleshooting",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging(json_output=args.json_logs)
        logger.error("failed_to_load_settings", error=str(e))
        return 1

    level = logging.DEBUG if args.debug else settings.get_log_level()
    configure_logging(json_output=args.json_logs or settings.json_logs, level=level)

    try:
        extracted = ExtractedPropertyData.model_validate_json(_read_json(args.listing))
        premium = (
            PremiumData.model_validate_json(_read_json(args.premium)) if args.premium else None
        )
    except (OSError, ValidationError) as e:
        logger.error("invalid_input", error=str(e))
        return 1

    evaluation = evaluate_property(
        extracted,
        premium,
        premium_loading=args.premium_loading,
        settings=settings,
    )
    print(evaluation.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
