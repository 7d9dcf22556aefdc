#!/usr/bin/env python3
"""
Download QR badges for check-in as a ZIP of PNGs.

Each badge encodes the player id that the check-in scanner reads.

Usage:
    python scripts/qr_badges.py
    python scripts/qr_badges.py --team <team id> --output-dir exports
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cricleague import DocumentStore, write_badges_zip
from cricleague.config import get_data_dir


def main():
    parser = argparse.ArgumentParser(description="Generate player QR badges")
    parser.add_argument("--data-dir", "-d", default=None, help="Path to data directory")
    parser.add_argument("--output-dir", "-o", default="exports", help="Directory for the ZIP file")
    parser.add_argument("--team", default=None, help="Only players of this team id")
    args = parser.parse_args()

    store = DocumentStore(args.data_dir or get_data_dir())
    zip_path = Path(args.output_dir) / f"qr-badges-{datetime.now():%Y-%m-%d-%H-%M-%S}.zip"

    try:
        path, count = write_badges_zip(store, zip_path, team_id=args.team)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"✓ {count} QR badges written to {path}")


if __name__ == "__main__":
    main()
