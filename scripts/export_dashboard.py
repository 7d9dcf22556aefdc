#!/usr/bin/env python3
"""
Admin dashboard export.

Prints collection counts and writes users / players exports as CSV, Excel
and PDF.

Usage:
    python scripts/export_dashboard.py
    python scripts/export_dashboard.py --output-dir exports --data-dir data
    python scripts/export_dashboard.py --format pdf
"""

import argparse
import sys
from pathlib import Path

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cricleague import DocumentStore, dashboard_counts, to_csv, write_pdf, write_xlsx
from cricleague.config import get_data_dir
from cricleague.export import collection_rows, write_csv

PLAYER_FIELDS = ['id', 'name', 'age', 'phone', 'preferredRole', 'teamId', 'checkedIn']
FORMATS = ('csv', 'xlsx', 'pdf')


def main():
    parser = argparse.ArgumentParser(description="Export admin dashboard data")
    parser.add_argument("--data-dir", "-d", default=None, help="Path to data directory")
    parser.add_argument("--output-dir", "-o", default="exports", help="Directory for export files")
    parser.add_argument(
        "--format", "-f",
        choices=FORMATS,
        action="append",
        help="Export format (repeatable, default: all)",
    )
    args = parser.parse_args()

    store = DocumentStore(args.data_dir or get_data_dir())
    output_dir = Path(args.output_dir)
    formats = args.format or list(FORMATS)

    counts = dashboard_counts(store)
    print("Dashboard")
    for label, count in counts.items():
        print(f"  {label.capitalize():<8} {count}")

    exports = {
        'users': (collection_rows(store, 'users'), None),
        'players': (collection_rows(store, 'players'), PLAYER_FIELDS),
    }

    for name, (rows, fields) in exports.items():
        if not rows:
            print(f"No {name} to export")
            continue

        title = f"{name.capitalize()} export"
        written = []
        if 'csv' in formats:
            written.append(write_csv(output_dir / f"{name}.csv", to_csv(rows, fields)))
        if 'xlsx' in formats:
            written.append(write_xlsx(output_dir / f"{name}-export.xlsx", rows, title, fields))
        if 'pdf' in formats:
            written.append(write_pdf(output_dir / f"{name}-export.pdf", rows, title, fields))
        print(f"Exported {len(rows)} {name}: {', '.join(str(p) for p in written)}")


if __name__ == "__main__":
    main()
