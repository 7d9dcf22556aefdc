"""Bulk player import from CSV.

Expected columns: name, age, aadhaar, phone, preferredRole, teamName.
Header matching is case-insensitive and tolerates a few spellings
(``preferred_role``/``role``, ``team_name``/``team``). Teams named in the
file are matched by name (case-insensitive) and created when missing.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

import polars as pl
from pydantic import ValidationError

from .config import get_min_player_age
from .constants import IMPORT_ERROR_FIELDS, IMPORT_HEADER_MAP, IMPORT_TEMPLATE_HEADERS, IMPORT_TEMPLATE_ROW
from .export import to_csv
from .models import ImportRowResult
from .registration import build_player_document
from .schemas import TeamDocument
from .store import DocumentStore
from .validators import is_valid_aadhaar_format, is_valid_age

logger = logging.getLogger('cricleague.player_import')


def _clean_string(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def canonicalize_row(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map CSV header names onto canonical player fields and trim values.

    Unrecognized columns are passed through untouched.
    """
    canonical: dict[str, Any] = {}
    for key, value in raw.items():
        field = IMPORT_HEADER_MAP.get(key.strip().lower())
        if field:
            canonical[field] = _clean_string(value)
        else:
            canonical[key] = value
    return canonical


def read_player_csv(csv_path: str | Path) -> list[dict[str, Optional[str]]]:
    """
    Read a player CSV with every column as text.

    Blank lines are skipped and an empty file gives no rows.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f'CSV file not found: {csv_path}')

    df = pl.read_csv(csv_path, infer_schema_length=0, raise_if_empty=False)
    rows = df.to_dicts()
    return [row for row in rows if any(_clean_string(v) for v in row.values())]


def template_csv() -> str:
    """CSV template with the expected header and one sample row."""
    return '\n'.join([','.join(IMPORT_TEMPLATE_HEADERS), ','.join(IMPORT_TEMPLATE_ROW)])


def _team_lookup(store: DocumentStore) -> dict[str, str]:
    lookup = {}
    for team_id, doc in store.all('teams').items():
        name = _clean_string(doc.get('name')).lower()
        if name:
            lookup[name] = team_id
    return lookup


def import_players(
    store: DocumentStore,
    rows: Iterable[Mapping[str, Any]],
    min_age: Optional[int] = None,
) -> list[ImportRowResult]:
    """
    Validate and import player rows.

    Bad rows are reported in the results, they never abort the import.

    Args:
        store: Document store
        rows: Raw CSV rows (header -> value)
        min_age: Minimum age (default: league config)

    Returns:
        One ImportRowResult per row, in file order
    """
    if min_age is None:
        min_age = get_min_player_age()

    team_ids = _team_lookup(store)
    results = []

    for i, raw_row in enumerate(rows):
        raw = canonicalize_row(raw_row or {})
        row_index = i + 2  # header is line 1

        def failed(error: str) -> ImportRowResult:
            logger.warning(f'Import row {row_index}: {error}')
            return ImportRowResult(row_index=row_index, raw=raw, ok=False, error=error)

        if not raw.get('name'):
            results.append(failed('Missing name'))
            continue
        if not raw.get('age') or not is_valid_age(raw['age'], min_age=min_age):
            results.append(failed(f'Invalid or missing age (must be numeric >= {min_age})'))
            continue
        if raw.get('aadhaar') and not is_valid_aadhaar_format(raw['aadhaar']):
            results.append(failed('Invalid Aadhaar (should be 12 digits)'))
            continue

        team_id = None
        team_name = raw.get('teamName')
        if team_name:
            key = team_name.lower()
            team_id = team_ids.get(key)
            if team_id is None:
                team_doc = TeamDocument(name=team_name).model_dump(exclude={'createdAt'})
                team_id = store.add('teams', team_doc)
                team_ids[key] = team_id
                logger.info(f'Created team {team_name!r} ({team_id}) during import')

        try:
            player_doc = build_player_document(raw, team_id)
        except ValidationError as e:
            results.append(failed(f'Invalid player record: {e.errors()[0]["msg"]}'))
            continue

        player_id = store.add('players', player_doc)
        results.append(
            ImportRowResult(row_index=row_index, raw=raw, ok=True, created_id=player_id)
        )

    created = sum(1 for r in results if r.ok)
    logger.info(f'Imported {created} players ({len(results) - created} errors)')
    return results


def import_players_from_csv(store: DocumentStore, csv_path: str | Path) -> list[ImportRowResult]:
    """Read a CSV file and import its rows."""
    return import_players(store, read_player_csv(csv_path))


def import_error_rows(results: Iterable[ImportRowResult]) -> list[dict[str, Any]]:
    """Failed rows with their line number and error, for the errors download."""
    rows = []
    for result in results:
        if result.ok:
            continue
        row = {'rowIndex': result.row_index, 'error': result.error or ''}
        for field in IMPORT_TEMPLATE_HEADERS:
            row[field] = result.raw.get(field) or ''
        rows.append(row)
    return rows


def import_errors_csv(results: Iterable[ImportRowResult]) -> str:
    """CSV of the failed rows (empty string when every row imported)."""
    rows = import_error_rows(results)
    if not rows:
        return ''
    return to_csv(rows, IMPORT_ERROR_FIELDS)
