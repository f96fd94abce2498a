#!/usr/bin/env python3
"""
Voyager Profile Extractor — Entry Point.

Fetches a LinkedIn profile or runs a people search through the Voyager
GraphQL API, resolves the normalized response into Profile entities and
saves them as JSON. Credentials are read from a .env file.

Usage:
    python run.py profile jane-doe                      # Fetch one profile
    python run.py search "data scientist" --network F O # People search
    python run.py search "cto" --start 10 --count 5     # Paging
    python run.py profile jane-doe --from-file resp.json  # Resolve a saved response
    python run.py profile jane-doe --debug              # Verbose output
    python run.py --version                             # Show version
"""

import argparse
import logging
import sys
from pathlib import Path

from core import SearchArgs, VoyagerOrchestrator

# Read version from the repo-root VERSION file (e.g., "0.1.0").
VERSION_FILE = Path(__file__).resolve().parent / "VERSION"
VERSION = VERSION_FILE.read_text().strip() if VERSION_FILE.exists() else "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Voyager Profile Extractor - Resolve LinkedIn profiles from the Voyager GraphQL API"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--no-save", action="store_true", help="Do not write JSON output")
    parser.add_argument("--from-file", help="Resolve a saved response body instead of calling the API")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    commands = parser.add_subparsers(dest="command")

    profile = commands.add_parser("profile", help="Fetch one profile by public identifier")
    profile.add_argument("public_identifier", help='Vanity name from the profile URL, e.g. "jane-doe"')

    search = commands.add_parser("search", help="Search people by keywords")
    search.add_argument("keywords", help="Search keywords")
    search.add_argument("--network", nargs="+", default=[], help="Network degree filters, e.g. F S O")
    search.add_argument("--start", type=int, default=0, help="Paging offset")
    search.add_argument("--count", type=int, default=None, help="Page size (default: SEARCH_COUNT)")

    return parser


def main():
    """Parse CLI arguments and run the requested extraction."""
    parser = build_parser()
    args = parser.parse_args()

    if args.version:
        print(f"voyager-profile-extractor {VERSION}")
        sys.exit(0)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )

    orchestrator = VoyagerOrchestrator(env_file=args.env)

    # Apply CLI overrides on top of .env values
    if args.debug:
        orchestrator.debug = True
    if args.no_save:
        orchestrator.save_json = False

    print(f"\n{'='*60}")
    print(f"VOYAGER PROFILE EXTRACTOR v{VERSION}")
    print("="*60)
    print(f"Mode: {args.command}")
    print(f"Source: {args.from_file or 'Voyager API'}")

    if not orchestrator.validate_config(offline=bool(args.from_file)):
        sys.exit(1)

    if orchestrator.output_manager.retention_days > 0:
        deleted = orchestrator.output_manager.cleanup_old_folders(orchestrator.debug)
        if deleted > 0:
            print(f"Cleaned up {deleted} old output folder(s)")

    if args.command == "profile":
        results = orchestrator.run_profile(args.public_identifier, from_file=args.from_file)
    else:
        filters = {"network": args.network} if args.network else {}
        search_args = SearchArgs(keywords=args.keywords, filters=filters, start=args.start, count=args.count)
        results = orchestrator.run_search(search_args, from_file=args.from_file)

    orchestrator.print_summary(results)

    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
