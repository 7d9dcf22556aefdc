#!/usr/bin/env python3
"""
League Leaderboard CLI

Builds the standings table from the document store. Team season totals are
used when the teams carry them; otherwise standings are computed from the
match records.

Usage:
    python leaderboard.py
    python leaderboard.py --data-dir data --output web/data/standings.json
    python leaderboard.py --csv exports/leaderboard.csv --xlsx exports/leaderboard.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

from cricleague import DocumentStore, save_standings_json, standings_from_documents
from cricleague.config import get_data_dir, get_league_name
from cricleague.export import standings_table_rows, standings_to_csv, write_csv, write_xlsx
from cricleague.logging_config import setup_logging
from cricleague.standings import COMPUTED


def main():
    parser = argparse.ArgumentParser(description="Cricket league leaderboard")
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Path to data directory (defaults to data_dir from league_config.json)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write standings JSON to this path",
    )
    parser.add_argument(
        "--csv",
        default=None,
        help="Write leaderboard CSV to this path",
    )
    parser.add_argument(
        "--xlsx",
        default=None,
        help="Write leaderboard Excel workbook to this path",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging, also written to logs/",
    )

    args = parser.parse_args()

    setup_logging(verbose=args.verbose, log_dir=Path("logs") if args.verbose else None)
    logger = logging.getLogger("cricleague.leaderboard")

    data_dir = Path(args.data_dir) if args.data_dir else get_data_dir()
    if not data_dir.exists():
        print(f"❌ Data directory not found: {data_dir}")
        sys.exit(1)

    store = DocumentStore(data_dir)
    try:
        mode, rows = standings_from_documents(store.all("teams"), store.all("matches"))
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)
    logger.debug(f"{len(rows)} teams in table ({mode} mode)")

    print("\n" + "=" * 60)
    print(f"{get_league_name().upper()} LEADERBOARD")
    print("Computed from matches" if mode == COMPUTED else "Using teams collection fields")
    print("=" * 60)

    if not rows:
        print("  No teams found.")
    for rank, row in enumerate(rows, 1):
        nrr = "-" if row.nrr is None else f"{row.nrr:+.3f}"
        print(
            f"  {rank:>2}. {row.name:<28} P {row.played:>3}  W {row.won:>3}  "
            f"D {row.drawn:>3}  L {row.lost:>3}  Pts {row.points:>4}  NRR {nrr}"
        )

    if args.output:
        save_standings_json(args.output, rows, mode)
        print(f"Standings saved to {args.output}")

    if args.csv:
        write_csv(args.csv, standings_to_csv(rows))
        print(f"CSV saved to {args.csv}")

    if args.xlsx:
        if not rows:
            print("⚠️  No rows to export, skipping Excel file")
        else:
            write_xlsx(args.xlsx, standings_table_rows(rows), title="Leaderboard")
            print(f"Excel saved to {args.xlsx}")


if __name__ == "__main__":
    main()
