"""
Command-line interface for the card scanner.

Examples:
    card-scanner config set sheet_url https://docs.google.com/spreadsheets/d/<id>/edit
    card-scanner config set sheet_column B
    card-scanner load-sheet --tab "My Collection"
    card-scanner scan ./binder-page.jpeg
    card-scanner match "Charizard VSTAR"
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from backend.core.match import resolve, suggest_matches
from backend.core.normalize import normalize_name
from backend.services.scanner import ScannerService, ScanPreconditionError
from backend.services.sheets_client import SheetsClient, SheetsClientError
from backend.services.vision_client import (
    GeminiVisionClient,
    VisionClientError,
    encode_image_file,
)
from backend.settings import Settings, get_settings
from domain.models.scan import ScannerSettings
from infrastructure import YamlScannerStore

SETTING_KEYS = ("sheet_url", "sheet_tab", "sheet_column", "vision_api_key")


def build_scanner(settings: Settings) -> ScannerService:
    """Wire a ScannerService from application settings."""
    return ScannerService(
        store=YamlScannerStore(settings.scanner_store_path),
        sheets=SheetsClient(timeout=settings.sheets_timeout),
        vision_factory=lambda api_key: GeminiVisionClient(
            api_key=api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            max_output_tokens=settings.vision_max_output_tokens,
            timeout=settings.vision_timeout,
        ),
        fallback_api_key=settings.gemini_api_key,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-scanner",
        description="Find cards from your missing list in a photo",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("normalize", help="Show the comparison key for a card name")
    p.add_argument("name")

    p = sub.add_parser("match", help="Resolve a name against the missing list")
    p.add_argument("name")
    p.add_argument(
        "--canonical",
        nargs="+",
        help="Names to match against (default: stored missing list)",
    )
    p.add_argument("--suggest", type=int, default=0, metavar="N", help="Also show N ranked suggestions")

    p = sub.add_parser("load-sheet", help="Load the missing list from Google Sheets")
    p.add_argument("--url", help="Google Sheets URL (saved to settings)")
    p.add_argument("--tab", help="Tab name (saved to settings)")
    p.add_argument("--column", help="Column letter (saved to settings)")

    p = sub.add_parser("list", help="Print the stored missing list")
    p.add_argument("--search", default="", help="Case-insensitive filter")

    p = sub.add_parser("scan", help="Find missing-list cards in a photo")
    p.add_argument("image", help="Path to a .jpg/.png/.webp/.gif image")
    p.add_argument("--json", action="store_true", help="Print the report as JSON")

    p = sub.add_parser("config", help="Show or change saved settings")
    config_sub = p.add_subparsers(dest="config_command", required=True)
    config_sub.add_parser("show", help="Print saved settings (API key redacted)")
    p_set = config_sub.add_parser("set", help="Change one setting")
    p_set.add_argument("key", choices=SETTING_KEYS)
    p_set.add_argument("value")

    return parser


def _cmd_normalize(args, scanner: ScannerService) -> None:
    print(normalize_name(args.name))


def _cmd_match(args, scanner: ScannerService) -> None:
    canonical = args.canonical if args.canonical else scanner.missing_list()
    result = resolve(args.name, canonical)
    if result.is_match:
        print(f"{result.matched_name}\t{result.confidence:.3f}\t{result.method.value}")
    else:
        print("no match")
    if args.suggest > 0:
        for suggestion in suggest_matches(args.name, canonical, limit=args.suggest):
            print(f"  ? {suggestion.matched_name}\t{suggestion.confidence:.3f}")


def _cmd_load_sheet(args, scanner: ScannerService) -> None:
    settings = scanner.get_settings()
    updates = {
        key: value
        for key, value in (("sheet_url", args.url), ("sheet_tab", args.tab), ("sheet_column", args.column))
        if value is not None
    }
    if updates:
        data = settings.model_dump()
        data.update(updates)
        settings = scanner.update_settings(ScannerSettings(**data))

    names = asyncio.run(scanner.load_missing_list(settings))
    print(f"Loaded {len(names)} cards from sheet")


def _cmd_list(args, scanner: ScannerService) -> None:
    for name in scanner.missing_list(args.search):
        print(name)


def _cmd_scan(args, scanner: ScannerService) -> None:
    image = encode_image_file(args.image)
    report = asyncio.run(scanner.scan(image))
    if args.json:
        print(report.model_dump_json(indent=2))
        return
    print(report.message)
    for result in report.results:
        print(f"  {result.name}")


def _cmd_config(args, scanner: ScannerService) -> None:
    settings = scanner.get_settings()
    if args.config_command == "show":
        shown = settings.model_dump()
        shown["vision_api_key"] = "(set)" if settings.has_api_key else "(not set)"
        print(json.dumps(shown, indent=2))
        return

    data = settings.model_dump()
    data[args.key] = args.value
    scanner.update_settings(ScannerSettings(**data))
    print(f"Saved {args.key}")


COMMANDS = {
    "normalize": _cmd_normalize,
    "match": _cmd_match,
    "load-sheet": _cmd_load_sheet,
    "list": _cmd_list,
    "scan": _cmd_scan,
    "config": _cmd_config,
}


def main(argv: Optional[List[str]] = None, scanner: Optional[ScannerService] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if scanner is None:
            scanner = build_scanner(get_settings())
        COMMANDS[args.command](args, scanner)

    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (ScanPreconditionError, SheetsClientError, VisionClientError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        # pydantic ValidationError is a ValueError
        print(f"Error: Invalid value: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
