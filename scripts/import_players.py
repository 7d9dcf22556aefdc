#!/usr/bin/env python3
"""
Bulk-import players from a CSV file.

Columns: name, age, aadhaar, phone, preferredRole, teamName
Teams named in the file are created if they don't exist yet. Rows that fail
validation are listed and written to an errors CSV (row number, error and
the original values) that can be fixed up and imported again.

Usage:
    python scripts/import_players.py players.csv
    python scripts/import_players.py players.csv --data-dir data --errors-csv exports/import-errors.csv
    python scripts/import_players.py --template > players-import-template.csv
"""

import argparse
import sys
from pathlib import Path

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cricleague import DocumentStore, import_errors_csv, import_players_from_csv, template_csv
from cricleague.config import get_data_dir
from cricleague.export import write_csv
from cricleague.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Import players from CSV")
    parser.add_argument("csv_file", nargs="?", help="CSV file to import")
    parser.add_argument("--data-dir", "-d", default=None, help="Path to data directory")
    parser.add_argument(
        "--errors-csv",
        default="players-import-errors.csv",
        help="Where to write rows that failed (default: players-import-errors.csv)",
    )
    parser.add_argument(
        "--template",
        action="store_true",
        help="Print the CSV template and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    if args.template:
        print(template_csv())
        return

    if not args.csv_file:
        parser.error("csv_file is required unless --template is given")

    setup_logging(verbose=args.verbose, quiet=not args.verbose)

    store = DocumentStore(args.data_dir or get_data_dir())

    try:
        results = import_players_from_csv(store, args.csv_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        sys.exit(1)

    if not results:
        print("No rows found in CSV")
        return

    created = [r for r in results if r.ok]
    errors = [r for r in results if not r.ok]

    print(f"Created: {len(created)}")
    print(f"Errors:  {len(errors)}")
    for r in errors:
        print(f"  Row {r.row_index}: {r.error} ({r.raw.get('name') or 'no name'})")

    if errors:
        path = write_csv(args.errors_csv, import_errors_csv(results))
        print(f"Error rows written to {path}")
        sys.exit(1)


if __name__ == "__main__":
    main()
