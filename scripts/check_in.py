#!/usr/bin/env python3
"""
Check players in from scanned QR text, or list check-in status.

Usage:
    python scripts/check_in.py <scanned text> [<scanned text> ...]
    python scripts/check_in.py --list
"""

import argparse
import sys
from pathlib import Path

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cricleague import DocumentNotFoundError, DocumentStore, check_in, checked_in_players
from cricleague.config import get_data_dir


def main():
    parser = argparse.ArgumentParser(description="QR check-in")
    parser.add_argument("scanned", nargs="*", help="Decoded QR text (player id or JSON)")
    parser.add_argument("--data-dir", "-d", default=None, help="Path to data directory")
    parser.add_argument("--list", action="store_true", help="List players and check-in status")
    args = parser.parse_args()

    store = DocumentStore(args.data_dir or get_data_dir())

    failed = False
    for text in args.scanned:
        try:
            player = check_in(store, text)
            print(f"✓ Player checked in: {player.name or player.id}")
        except DocumentNotFoundError as e:
            print(f"❌ {e}")
            failed = True

    if args.list:
        for player in checked_in_players(store):
            status = "IN " if player.checked_in else "   "
            print(f"  [{status}] {player.name:<28} {player.team_name or '-'}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
