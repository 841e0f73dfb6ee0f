#!/usr/bin/env python3
"""CLI tool to fetch card data from the YGOPRODeck API and populate ChromaDB."""

import argparse
import sys
from pathlib import Path

import httpx

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
from backend.core.logging_config import setup_logging
from backend.services.card_import import fetch_cards, import_cards
from backend.services.chroma_client import ChromaClient
from backend.services.ydk_parser import parse_ydk


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Import card metadata from YGOPRODeck into the card store"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--archetype",
        type=str,
        help="Import every card of an archetype (e.g. 'Blue-Eyes')",
    )
    source.add_argument(
        "--ids",
        type=str,
        nargs="+",
        help="Import specific card passcodes",
    )
    source.add_argument(
        "--ydk",
        type=Path,
        help="Import every card listed in a .ydk deck file",
    )
    parser.add_argument(
        "--chroma-path",
        type=str,
        default=None,
        help="ChromaDB directory (defaults to CHROMA_PATH)",
    )

    args = parser.parse_args()
    setup_logging(enable_file=False)

    card_ids = args.ids
    if args.ydk:
        sections = parse_ydk(args.ydk.read_text(encoding="utf-8"))
        card_ids = list(dict.fromkeys(sections.main + sections.extra + sections.side))
        if not card_ids:
            print(f"No cards found in {args.ydk}", file=sys.stderr)
            sys.exit(1)

    try:
        raw_cards = fetch_cards(archetype=args.archetype, card_ids=card_ids)
    except httpx.HTTPError as e:
        print(f"Failed to fetch cards: {e}", file=sys.stderr)
        sys.exit(1)

    count = import_cards(raw_cards, ChromaClient(args.chroma_path))
    print(f"\n✓ Import complete: {count} cards")


if __name__ == "__main__":
    main()
